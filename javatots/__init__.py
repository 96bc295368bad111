"""
Java to TypeScript Transpiler

This package converts Java compilation units into TypeScript source, driven
by a YAML configuration that maps Java modules and packages onto a
TypeScript source tree.

Module Structure:
- parser/: AST nodes, tree walking, comment recovery, javalang front end
- imports/: module specifier encoding and module/package resolution
- transforms/: tree rewrites and the import-driven pass selector
- codegen/: TypeScript code generation (TypeScriptCodeGenerator and helpers)
- config/: configuration model and YAML loader
- j2ts.py: driver and command line interface

Usage:
    from javatots import JavaToTypeScriptTranspiler, load_config

    transpiler = JavaToTypeScriptTranspiler(load_config('jts-config.yaml'))
    transpiler.write_output(transpiler.walk_modules())
"""

from .j2ts import JavaToTypeScriptTranspiler, TranspileResult
from .config import JtsConfig, ModuleMap, PackageMap, load_config
from .codegen import TypeScriptCodeGenerator, TranspilerDiagnostics
from .parser import parse_java
from .errors import (
    TranspilerError,
    ConfigurationError,
    JavaSyntaxError,
    SourceReadError,
    UnsupportedConstructError,
    GeneratorStateError,
)

__all__ = [
    'JavaToTypeScriptTranspiler',
    'TranspileResult',
    'JtsConfig',
    'ModuleMap',
    'PackageMap',
    'load_config',
    'TypeScriptCodeGenerator',
    'TranspilerDiagnostics',
    'parse_java',
    'TranspilerError',
    'ConfigurationError',
    'JavaSyntaxError',
    'SourceReadError',
    'UnsupportedConstructError',
    'GeneratorStateError',
]
