#!/usr/bin/env python3
"""
Java to TypeScript Transpiler

Converts the Java modules described by a YAML configuration into a
TypeScript source tree. Each compilation unit goes through the same
pipeline:

- parser: javalang front end, converted to the transpiler's AST with
  comments attached
- transforms: the pass selector rewrites the imports and picks the tree
  rewrites the unit needs; the passes run in order
- codegen: the TypeScript code generator renders the rewritten tree

Usage:
    javatots jts-config.yaml
    javatots jts-config.yaml --file path/to/Foo.java --stdout
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .codegen import TranspilerDiagnostics, TypeScriptCodeGenerator, default_callbacks
from .config import JtsConfig, ModuleMap, load_config
from .errors import SourceReadError, TranspilerError
from .imports import ModuleResolver
from .parser import parse_java
from .transforms import PassSelector, TransformContext, apply_passes


JAVA_FILE_PATTERN = '*.java'


@dataclass
class TranspileResult:
    """TypeScript text for one compilation unit, with the diagnostics it raised."""
    text: str
    diagnostics: TranspilerDiagnostics


class JavaToTypeScriptTranspiler:
    """Main transpiler class that orchestrates the conversion process."""

    def __init__(self, config: JtsConfig, verbose: bool = False):
        """
        Initialize the transpiler.

        Args:
            config: The loaded configuration
            verbose: Print every diagnostic in the summary, not only counts
        """
        self.config = config
        self.verbose = verbose
        self.resolver = ModuleResolver(config.module_maps)
        self.callbacks = default_callbacks(config)
        self.diagnostics = TranspilerDiagnostics(verbose=verbose)

    # =========================================================================
    # SINGLE UNITS
    # =========================================================================

    def transpile_source(
        self,
        source: str,
        module_name: str,
        siblings: Iterable[str] = (),
        filename: str = '',
    ) -> TranspileResult:
        """Transpile one Java compilation unit.

        Args:
            source: The Java source text
            module_name: The configured module the unit belongs to
            siblings: Class names of the other files in the unit's directory
            filename: Source path, for messages

        Returns:
            The TypeScript text and the unit's diagnostics

        Raises:
            TranspilerError: If the unit cannot be transpiled; ``unit`` names
                the file
        """
        diagnostics = TranspilerDiagnostics(verbose=self.verbose)
        try:
            unit = parse_java(source, filename, diagnostics)

            ctx = TransformContext(self.config.type_mappings, filename, diagnostics)
            selector = PassSelector(self.resolver, module_name, ctx, self.config.unresolved_imports)
            passes = selector.select(unit, siblings)
            unit = apply_passes(unit, passes, ctx)

            generator = TypeScriptCodeGenerator(
                self.callbacks,
                indent_str=self.config.indent_str,
                comment_final_parameters=self.config.comment_final_parameters,
                diagnostics=diagnostics,
            )
            text = generator.generate(unit, filename)
        except TranspilerError as e:
            if e.unit is None and filename:
                e.unit = filename
            raise

        self.diagnostics.extend(diagnostics)
        return TranspileResult(text, diagnostics)

    def transpile_file(
        self,
        filepath: str,
        module_name: str,
        siblings: Optional[Iterable[str]] = None,
    ) -> TranspileResult:
        """Transpile a single Java file.

        Args:
            filepath: Path of the Java file
            module_name: The configured module the file belongs to
            siblings: Class names of the other files in the same directory;
                discovered from the filesystem if None

        Raises:
            SourceReadError: If the file cannot be read as UTF-8 text
        """
        path = Path(filepath)
        if siblings is None:
            siblings = sibling_names(path, path.parent.glob(JAVA_FILE_PATTERN))
        try:
            with open(path, 'r', encoding='utf-8') as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f'cannot read source: {e}', str(path)) from e
        return self.transpile_source(source, module_name, siblings, str(path))

    # =========================================================================
    # MODULE WALKING
    # =========================================================================

    def source_root(self, module_name: str) -> Path:
        """Directory holding the Java sources of a module."""
        module = self.config.module(module_name)
        return Path(self.config.input_directory) / module_name / module.src_root

    def output_path(self, module: ModuleMap, java_relative_path: str) -> Tuple[Path, bool]:
        """Where the TypeScript file for a source-root-relative Java path goes.

        Returns:
            Tuple of (output path, whether a PackageMap placed it)
        """
        ts_relative, matched = module.ts_file_name(java_relative_path)
        return Path(self.config.output_directory) / module.output_path / ts_relative, matched

    def module_for_file(self, filepath: str) -> Tuple[str, str]:
        """Find the configured module whose source root contains a file.

        Returns:
            Tuple of (module name, path relative to the module's source root)

        Raises:
            TranspilerError: If no module contains the file
        """
        path = Path(filepath).resolve()
        for module_name in self.config.module_names():
            root = self.source_root(module_name).resolve()
            if path.is_relative_to(root):
                return module_name, path.relative_to(root).as_posix()
        raise TranspilerError(f'{filepath} is not under any configured module source root')

    def walk_modules(self) -> Dict[str, str]:
        """Transpile every Java file of every configured module.

        Failures are reported per file and do not stop the walk.

        Returns:
            Output path -> TypeScript text
        """
        results: Dict[str, str] = {}
        for module_name in self.config.module_names():
            module = self.config.module(module_name)
            root = self.source_root(module_name)
            print(f'Mapping: {root}')
            if not root.is_dir():
                print(f'Error transpiling module {module_name}: {root} is not a directory')
                continue

            java_files = sorted(root.rglob(JAVA_FILE_PATTERN))
            for java_file in java_files:
                relative = java_file.relative_to(root).as_posix()
                output, matched = self.output_path(module, relative)
                if not matched:
                    self.diagnostics.info_default_placement(relative, str(output))
                print(f'-- {relative} -> {output}')

                siblings = sibling_names(java_file, java_files)
                try:
                    result = self.transpile_file(str(java_file), module_name, siblings)
                except TranspilerError as e:
                    print(f'Error transpiling {java_file}: {e}')
                    continue
                results[str(output)] = result.text
        return results

    def write_output(self, results: Dict[str, str]) -> None:
        """Write transpiled TypeScript files to disk."""
        for filepath, content in results.items():
            path = Path(filepath)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(content)
            print(f'Written: {filepath}')


def sibling_names(java_file: Path, candidates: Iterable[Path]) -> List[str]:
    """Class names of the other Java files in ``java_file``'s directory."""
    return sorted(
        p.stem for p in candidates
        if p.parent == java_file.parent and p.name != java_file.name
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Java to TypeScript Transpiler')
    parser.add_argument('config', help='YAML configuration file')
    parser.add_argument('--file', metavar='JAVA_FILE',
                        help='Transpile only this file (must be under a configured module)')
    parser.add_argument('--stdout', action='store_true', help='Print to stdout instead of writing files')
    parser.add_argument('-v', '--verbose', action='store_true', help='List every diagnostic')

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except TranspilerError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    transpiler = JavaToTypeScriptTranspiler(config, verbose=args.verbose)

    if args.file:
        try:
            module_name, relative = transpiler.module_for_file(args.file)
            result = transpiler.transpile_file(args.file, module_name)
        except TranspilerError as e:
            print(f'Error transpiling {args.file}: {e}', file=sys.stderr)
            return 1
        if args.stdout:
            print(result.text, end='')
        else:
            output, matched = transpiler.output_path(config.module(module_name), relative)
            if not matched:
                transpiler.diagnostics.info_default_placement(relative, str(output))
            transpiler.write_output({str(output): result.text})
    else:
        results = transpiler.walk_modules()
        if args.stdout:
            for filepath, content in results.items():
                print(f'// {filepath}')
                print(content, end='')
        else:
            transpiler.write_output(results)

    transpiler.diagnostics.print_summary()
    return 0


if __name__ == '__main__':
    sys.exit(main())
