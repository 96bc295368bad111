"""
Function generation for Java to TypeScript transpilation.

This module handles the generation of TypeScript code from Java method and
constructor declarations, including parameter lists, `override`, thrown
type lists and leftover annotations.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .callbacks import GeneratorCallbacks
    from .context import CodeGenerationContext
    from .expression import ExpressionGenerator
    from .statement import StatementGenerator
    from .type_converter import TypeConverter

from .base import BaseGenerator
from .modifiers import ModifierContext, render_modifiers
from ..parser.ast_nodes import (
    Annotation,
    ArrayType,
    ConstructorDeclaration,
    MethodDeclaration,
    Parameter,
)


OVERRIDE_ANNOTATION = 'Override'

# Methods every TypeScript class inherits without declaring them.
IMPLICIT_METHODS = frozenset({'toString'})


class FunctionGenerator(BaseGenerator):
    """
    Generates TypeScript code from Java method and constructor declarations.

    This class handles:
    - Methods, with bodies or as abstract/interface signatures
    - Constructors
    - Parameters, including varargs
    - Annotations left over after the transform passes
    """

    def __init__(
        self,
        ctx: 'CodeGenerationContext',
        expr_generator: 'ExpressionGenerator',
        stmt_generator: 'StatementGenerator',
        type_converter: 'TypeConverter',
        callbacks: 'GeneratorCallbacks',
    ):
        """
        Initialize the function generator.

        Args:
            ctx: The code generation context
            expr_generator: The expression generator
            stmt_generator: The statement generator
            type_converter: The type converter
            callbacks: Rendering hooks for throws and annotations
        """
        super().__init__(ctx)
        self._expr = expr_generator
        self._stmt = stmt_generator
        self._type_converter = type_converter
        self._callbacks = callbacks

    # =========================================================================
    # METHODS
    # =========================================================================

    def generate_method(self, method: MethodDeclaration) -> str:
        """Generate a method, or a method signature for interfaces and abstract methods."""
        lines = []
        override = any(a.simple_name == OVERRIDE_ANNOTATION for a in method.annotations)
        leftover = [a for a in method.annotations if a.simple_name != OVERRIDE_ANNOTATION]
        annotation_line = self._callbacks.annotations_line(self.annotation_texts(leftover))
        if annotation_line:
            lines.append(f'{self.indent()}{annotation_line}')

        if self._ctx.current_is_interface:
            modifiers = ''
        else:
            modifiers = render_modifiers(method.modifiers, ModifierContext.METHOD)
        if override and self._ctx.current_class_extends and method.name not in IMPLICIT_METHODS:
            modifiers += 'override '

        type_params = self._type_converter.convert_type_parameters(method.type_parameters)
        params = self.generate_parameters(method.parameters)
        return_type = self._type_converter.convert(method.return_type)
        throws = self.generate_throws(method)
        signature = f'{self.indent()}{modifiers}{method.name}{type_params}({params}): {return_type}{throws}'

        if method.body is None:
            lines.append(f'{signature};')
        elif self._ctx.current_is_interface:
            self._ctx.diagnostics.warn_unsupported_construct(
                'interface method body',
                f'body of {self._ctx.current_class_name}.{method.name} dropped',
                self._ctx.current_file_path,
                self._line(method),
            )
            lines.append(f'{signature};')
        else:
            with self._ctx.method_body():
                body = self._stmt.generate_block(method.body, inline=True)
            lines.append(f'{signature} {body}')

        return '\n'.join(lines)

    # =========================================================================
    # CONSTRUCTORS
    # =========================================================================

    def generate_constructor(self, ctor: ConstructorDeclaration) -> str:
        """Generate TypeScript code for a constructor."""
        lines = self.decorator_lines(ctor.annotations)
        modifiers = render_modifiers(ctor.modifiers, ModifierContext.CONSTRUCTOR)
        params = self.generate_parameters(ctor.parameters)
        throws = self.generate_throws(ctor)
        with self._ctx.method_body():
            body = self._stmt.generate_block(ctor.body, inline=True)
        lines.append(f'{self.indent()}{modifiers}constructor({params}){throws} {body}')
        return '\n'.join(lines)

    # =========================================================================
    # PARAMETERS AND THROWS
    # =========================================================================

    def generate_parameters(self, params: List[Parameter]) -> str:
        """Generate a comma-separated parameter list, in declaration order."""
        return ', '.join(self.generate_parameter(p) for p in params)

    def generate_parameter(self, param: Parameter) -> str:
        """Generate one parameter; varargs become a rest parameter."""
        modifiers = render_modifiers(
            param.modifiers,
            ModifierContext.PARAMETER,
            comment_final=self._ctx.comment_final_parameters,
        )
        decorators = ''.join(f'{text} ' for text in self.annotation_texts(param.annotations))
        if param.type is None:
            return f'{decorators}{modifiers}{param.name}'
        param_type = ArrayType(param.type) if param.is_varargs else param.type
        rest = '...' if param.is_varargs else ''
        return f'{decorators}{modifiers}{rest}{param.name}: {self._type_converter.convert(param_type)}'

    def generate_throws(self, decl) -> str:
        """Hand a non-empty thrown type list to the throws callback."""
        types = [self._type_converter.convert(t) for t in decl.throws]
        return self._callbacks.throws_suffix(types)

    # =========================================================================
    # ANNOTATIONS
    # =========================================================================

    def annotation_texts(self, annotations: List[Annotation]) -> List[str]:
        return [self._expr.generate_annotation(a) for a in annotations]

    def decorator_lines(self, annotations: List[Annotation]) -> List[str]:
        """Render annotations as decorator lines at the current indentation."""
        return [f'{self.indent()}{text}' for text in self.annotation_texts(annotations)]
