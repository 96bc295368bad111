"""
Code generation context for the TypeScript code generator.

This module provides a context class that holds all state needed during
code generation of one compilation unit, separating state management from
the generation logic.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from ..errors import GeneratorStateError
from ..parser.ast_nodes import TypeNode
from .diagnostics import TranspilerDiagnostics


@dataclass
class CodeGenerationContext:
    """
    Holds all state needed during TypeScript code generation.

    None of it survives from one compilation unit to the next; the generator
    calls ``reset_for_file`` before each unit.
    """

    # Indentation state
    indent_level: int = 0
    indent_str: str = '  '

    # File context
    current_file_path: str = ''

    # Type declaration context
    current_class_name: str = ''
    current_class_extends: bool = False
    current_is_interface: bool = False
    top_level: bool = True

    # Ambient declared type of the field or local declaration being rendered
    _declared_type: Optional[TypeNode] = None

    # Whether generation is inside a method, constructor or initializer body
    in_method: bool = False

    # Options
    comment_final_parameters: bool = False

    # Diagnostics collector
    _diagnostics: Optional[TranspilerDiagnostics] = None

    @property
    def diagnostics(self) -> TranspilerDiagnostics:
        """Get the diagnostics collector, creating one if needed."""
        if self._diagnostics is None:
            self._diagnostics = TranspilerDiagnostics()
        return self._diagnostics

    def indent(self) -> str:
        """Return the current indentation string."""
        return self.indent_str * self.indent_level

    def reset_for_file(self, file_path: str = '') -> None:
        """Reset state for a new file."""
        self.indent_level = 0
        self.current_file_path = file_path
        self.current_class_name = ''
        self.current_class_extends = False
        self.current_is_interface = False
        self.top_level = True
        self._declared_type = None
        self.in_method = False

    # =========================================================================
    # AMBIENT DECLARED TYPE
    # =========================================================================

    @property
    def declared_type(self) -> TypeNode:
        """The declared type of the variable being rendered.

        Raises:
            GeneratorStateError: If no field or local declaration is active
        """
        if self._declared_type is None:
            raise GeneratorStateError(
                'variable declarator',
                'rendered outside a field or local variable declaration',
            )
        return self._declared_type

    @contextmanager
    def declaring(self, type_node: TypeNode) -> Iterator[TypeNode]:
        """Make ``type_node`` the ambient declared type for the enclosed block."""
        saved = self._declared_type
        self._declared_type = type_node
        try:
            yield type_node
        finally:
            self._declared_type = saved

    @contextmanager
    def method_body(self) -> Iterator[None]:
        """Mark the enclosed block as being inside a body."""
        saved = self.in_method
        self.in_method = True
        try:
            yield
        finally:
            self.in_method = saved

    @contextmanager
    def type_declaration(self, name: str, extends: bool, is_interface: bool) -> Iterator[None]:
        """Enter a type declaration, restoring the enclosing one on exit."""
        saved = (
            self.current_class_name,
            self.current_class_extends,
            self.current_is_interface,
            self.top_level,
            self.in_method,
        )
        self.current_class_name = name
        self.current_class_extends = extends
        self.current_is_interface = is_interface
        self.top_level = False
        self.in_method = False
        try:
            yield
        finally:
            (
                self.current_class_name,
                self.current_class_extends,
                self.current_is_interface,
                self.top_level,
                self.in_method,
            ) = saved
