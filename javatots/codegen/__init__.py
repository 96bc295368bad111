"""
Code generation module for the Java to TypeScript transpiler.

This module provides TypeScript code generation from transformed Java AST
nodes.
"""

from .context import CodeGenerationContext
from .base import BaseGenerator
from .modifiers import ModifierContext, render_modifiers
from .type_converter import TypeConverter
from .expression import ExpressionGenerator
from .statement import StatementGenerator
from .function import FunctionGenerator
from .declaration import DeclarationGenerator
from .imports import ImportGenerator
from .callbacks import GeneratorCallbacks, default_callbacks, render_import
from .generator import TypeScriptCodeGenerator
from .diagnostics import TranspilerDiagnostics, Diagnostic, DiagnosticSeverity

__all__ = [
    'CodeGenerationContext',
    'BaseGenerator',
    'ModifierContext',
    'render_modifiers',
    'TypeConverter',
    'ExpressionGenerator',
    'StatementGenerator',
    'FunctionGenerator',
    'DeclarationGenerator',
    'ImportGenerator',
    'GeneratorCallbacks',
    'default_callbacks',
    'render_import',
    'TypeScriptCodeGenerator',
    'TranspilerDiagnostics',
    'Diagnostic',
    'DiagnosticSeverity',
]
