"""
Diagnostic/warning system for the transpiler.

Collects and reports non-fatal findings: places where the output was produced
on a best-effort basis (an import guessed as a wildcard, a construct lowered
to an approximation) rather than by an exact mapping.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class DiagnosticSeverity(Enum):
    WARNING = 'warning'
    INFO = 'info'


@dataclass
class Diagnostic:
    """One finding, located by file and (when known) line."""
    severity: DiagnosticSeverity
    code: str
    message: str
    file_path: str = ''
    line: Optional[int] = None
    construct: str = ''  # grouping key in the summary, e.g. 'import'

    def __str__(self) -> str:
        location = self.file_path
        if self.line:
            location = f'{location}:{self.line}'
        prefix = f'[{self.severity.value}] {location}: ' if location else f'[{self.severity.value}] '
        return f'{prefix}{self.message} ({self.code})'


class TranspilerDiagnostics:
    """
    Collects diagnostics while passes and generators run.

    Usage:
        diag = TranspilerDiagnostics()
        diag.warn_unresolved_import('com.acme.Foo', 'Bar.java', line=3)
        ...
        diag.print_summary()

    Codes:
        W001 unresolved import kept as a wildcard
        W002 try-with-resources lowered to declarations
        W003 nested type hoisted to module level
        W004 Java modifier dropped
        W005 this(...) constructor chaining passed through
        W099 other unsupported construct, output approximated
        I001 file placed without a matching PackageMap
    """

    def __init__(self, verbose: bool = False):
        self._diagnostics: List[Diagnostic] = []
        self._verbose = verbose

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.WARNING]

    def extend(self, other: 'TranspilerDiagnostics') -> None:
        """Append every diagnostic collected by another collector."""
        self._diagnostics.extend(other.diagnostics)

    def codes(self) -> List[str]:
        """Codes of the collected diagnostics, in collection order."""
        return [d.code for d in self._diagnostics]

    def _add(
        self,
        code: str,
        construct: str,
        message: str,
        file_path: str = '',
        line: Optional[int] = None,
        severity: DiagnosticSeverity = DiagnosticSeverity.WARNING,
    ) -> None:
        self._diagnostics.append(Diagnostic(severity, code, message, file_path, line, construct))

    # =========================================================================
    # SPECIFIC WARNING METHODS
    # =========================================================================

    def warn_unresolved_import(self, qualified_name: str, file_path: str = '', line: Optional[int] = None) -> None:
        self._add(
            'W001', 'import',
            f'Import "{qualified_name}" matches no configured module; emitted as a wildcard import.',
            file_path, line,
        )

    def warn_try_with_resources(self, file_path: str = '', line: Optional[int] = None) -> None:
        self._add(
            'W002', 'try-with-resources',
            'try-with-resources lowered to declarations; resources are not closed automatically.',
            file_path, line,
        )

    def warn_nested_type_hoisted(self, type_name: str, file_path: str = '', line: Optional[int] = None) -> None:
        self._add('W003', 'nested type', f'Nested type "{type_name}" emitted at module level.', file_path, line)

    def warn_modifier_dropped(self, modifier: str, file_path: str = '', line: Optional[int] = None) -> None:
        self._add(
            'W004', 'modifier',
            f'Modifier "{modifier}" has no TypeScript equivalent and was dropped.',
            file_path, line,
        )

    def warn_constructor_chaining(self, file_path: str = '', line: Optional[int] = None) -> None:
        self._add(
            'W005', 'constructor chaining',
            'this(...) constructor chaining has no TypeScript equivalent.',
            file_path, line,
        )

    def warn_unsupported_construct(
        self,
        construct: str,
        detail: str = '',
        file_path: str = '',
        line: Optional[int] = None,
    ) -> None:
        """Catch-all for constructs emitted as an approximation."""
        message = f'Unsupported construct: {construct}'
        if detail:
            message += f' ({detail})'
        self._add('W099', construct, message, file_path, line)

    def info_default_placement(self, file_path: str, output_path: str) -> None:
        self._add(
            'I001', 'placement',
            f'No packageMaps entry matched; placed at {output_path}',
            file_path, severity=DiagnosticSeverity.INFO,
        )

    # =========================================================================
    # REPORTING
    # =========================================================================

    def print_summary(self, file=None) -> None:
        """Print warnings grouped by construct to stderr (or ``file``).

        Individual findings, and info diagnostics, are listed only when verbose.
        """
        if file is None:
            file = sys.stderr

        warnings = self.warnings
        if warnings:
            print(f'\nTranspiler warnings ({len(warnings)}):', file=file)
            by_construct: Dict[str, List[Diagnostic]] = {}
            for w in warnings:
                by_construct.setdefault(w.construct or 'other', []).append(w)

            for construct, diags in sorted(by_construct.items()):
                print(f'  {construct}: {len(diags)} occurrence(s)', file=file)
                if self._verbose:
                    for d in diags:
                        print(f'    {d}', file=file)

        infos = [d for d in self._diagnostics if d.severity == DiagnosticSeverity.INFO]
        if infos and self._verbose:
            print(f'\nTranspiler info ({len(infos)}):', file=file)
            for d in infos:
                print(f'  {d}', file=file)
