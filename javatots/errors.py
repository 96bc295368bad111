"""
Error taxonomy for the Java to TypeScript transpiler.

Fatal conditions raise one of these for the compilation unit being
processed. Degraded-but-usable output is reported through
``codegen.diagnostics.TranspilerDiagnostics`` instead.
"""

from typing import Optional


class TranspilerError(Exception):
    """Base class for all transpiler failures.

    The driver fills in ``unit`` with the source file being processed so
    that the message identifies which compilation unit failed.
    """

    def __init__(self, message: str, unit: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.unit = unit

    def __str__(self) -> str:
        if self.unit:
            return f'{self.unit}: {self.message}'
        return self.message


class ConfigurationError(TranspilerError):
    """The configuration cannot map a required source path or module."""


class SourceReadError(TranspilerError):
    """A source file could not be read or decoded as UTF-8."""


class JavaSyntaxError(TranspilerError):
    """The Java front end could not parse the source text."""

    def __init__(self, message: str, line: Optional[int] = None, unit: Optional[str] = None):
        if line is not None:
            message = f'line {line}: {message}'
        super().__init__(message, unit)
        self.line = line


class UnsupportedConstructError(TranspilerError):
    """A construct the transforms and code generator do not cover."""

    def __init__(self, construct: str, detail: str = '', unit: Optional[str] = None):
        message = f'Unsupported construct: {construct}'
        if detail:
            message += f' ({detail})'
        super().__init__(message, unit)
        self.construct = construct
        self.detail = detail


class GeneratorStateError(UnsupportedConstructError):
    """The generator reached a state that a well-formed tree cannot produce."""
