"""
Type declaration generation for Java to TypeScript transpilation.

This module handles the generation of TypeScript classes, interfaces and
enums from Java type declarations, including fields, initializer blocks and
the hoisting of nested types to the enclosing scope.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .callbacks import GeneratorCallbacks
    from .context import CodeGenerationContext
    from .expression import ExpressionGenerator
    from .function import FunctionGenerator
    from .statement import StatementGenerator
    from .type_converter import TypeConverter

from .base import BaseGenerator
from .modifiers import ModifierContext, render_modifiers
from ..errors import UnsupportedConstructError
from ..parser.ast_nodes import (
    BodyDeclaration,
    ClassDeclaration,
    ConstructorDeclaration,
    EnumDeclaration,
    FieldDeclaration,
    InitializerDeclaration,
    MethodDeclaration,
    Modifier,
    TypeDeclaration,
    VariableDeclarator,
    variable_type,
)


class DeclarationGenerator(BaseGenerator):
    """
    Generates TypeScript code from Java type declarations.

    This class handles:
    - Classes and interfaces, with their member lists
    - Simple enums
    - Field declarations
    - Static initializer blocks
    - Nested types, which TypeScript cannot declare inside a class body
    """

    def __init__(
        self,
        ctx: 'CodeGenerationContext',
        expr_generator: 'ExpressionGenerator',
        stmt_generator: 'StatementGenerator',
        func_generator: 'FunctionGenerator',
        type_converter: 'TypeConverter',
        callbacks: 'GeneratorCallbacks',
    ):
        """
        Initialize the declaration generator.

        Args:
            ctx: The code generation context
            expr_generator: The expression generator
            stmt_generator: The statement generator
            func_generator: The function generator
            type_converter: The type converter
            callbacks: Rendering hooks for leftover annotations
        """
        super().__init__(ctx)
        self._expr = expr_generator
        self._stmt = stmt_generator
        self._func = func_generator
        self._type_converter = type_converter
        self._callbacks = callbacks

    # =========================================================================
    # TYPE DECLARATIONS
    # =========================================================================

    def generate_type_declaration(self, decl: TypeDeclaration) -> str:
        """Generate a class, interface or enum, followed by its hoisted nested types.

        Args:
            decl: The type declaration

        Returns:
            The TypeScript code, with the declaration's comment
        """
        nested: List[TypeDeclaration] = []
        if isinstance(decl, ClassDeclaration):
            code = self.generate_class(decl, nested)
        elif isinstance(decl, EnumDeclaration):
            code = self.generate_enum(decl)
        else:
            raise UnsupportedConstructError('type declaration', type(decl).__name__)

        parts = [self.with_comment(decl, code)]
        for inner in nested:
            self._ctx.diagnostics.warn_nested_type_hoisted(
                f'{decl.name}.{inner.name}', self._ctx.current_file_path, self._line(inner)
            )
            parts.append(self.generate_type_declaration(inner))
        return '\n\n'.join(parts)

    def generate_class(self, decl: ClassDeclaration, nested: List[TypeDeclaration]) -> str:
        """Generate a class or interface. Nested types are appended to ``nested``."""
        lines = self._func.decorator_lines(decl.annotations)

        modifiers = render_modifiers(decl.modifiers, ModifierContext.TYPE, top_level=self._ctx.top_level)
        if decl.is_interface:
            modifiers = modifiers.replace('abstract ', '')
        keyword = 'interface' if decl.is_interface else 'class'
        header = f'{self.indent()}{modifiers}{keyword} {decl.name}'
        header += self._type_converter.convert_type_parameters(decl.type_parameters)
        if decl.extends:
            header += f' extends {", ".join(self._type_converter.convert(t) for t in decl.extends)}'
        if decl.implements:
            header += f' implements {", ".join(self._type_converter.convert(t) for t in decl.implements)}'

        with self._ctx.type_declaration(decl.name, bool(decl.extends) and not decl.is_interface, decl.is_interface):
            body = self.generate_members(decl, decl.members, nested)

        lines.append(f'{header} {body}')
        return '\n'.join(lines)

    def generate_members(
        self,
        container: TypeDeclaration,
        members: List[BodyDeclaration],
        nested: List[TypeDeclaration],
    ) -> str:
        """Generate a braced member list.

        Members are separated by a blank line, except runs of fields.
        """
        def render(member: BodyDeclaration) -> str:
            if isinstance(member, TypeDeclaration):
                nested.append(member)
                return ''
            return self.with_comment(member, self.generate_member(member))

        self.indent_level += 1
        chunks = self.render_children(container, members, render)
        self.indent_level -= 1

        kinds = [type(m) for m in members] + [None] * (len(chunks) - len(members))
        pieces = []
        previous = None
        for kind, chunk in zip(kinds, chunks):
            if not chunk:
                continue
            if pieces:
                separator = '\n' if kind is FieldDeclaration and previous is FieldDeclaration else '\n\n'
                pieces.append(separator)
            pieces.append(chunk)
            previous = kind

        if not pieces:
            return '{}'
        return '{\n' + ''.join(pieces) + f'\n{self.indent()}}}'

    def generate_member(self, member: BodyDeclaration) -> str:
        """Generate one member of a class body."""
        if isinstance(member, FieldDeclaration):
            return self.generate_field(member)
        elif isinstance(member, MethodDeclaration):
            return self._func.generate_method(member)
        elif isinstance(member, ConstructorDeclaration):
            return self._func.generate_constructor(member)
        elif isinstance(member, InitializerDeclaration):
            return self.generate_initializer(member)

        raise UnsupportedConstructError('member', type(member).__name__)

    # =========================================================================
    # FIELDS
    # =========================================================================

    def generate_field(self, field: FieldDeclaration) -> str:
        """Generate one line per co-declared variable, sharing the field's modifiers."""
        lines = self._func.decorator_lines(field.annotations)
        if self._ctx.current_is_interface:
            modifiers = ''
        else:
            modifiers = render_modifiers(field.modifiers, ModifierContext.FIELD)

        with self._ctx.declaring(field.type):
            for var in field.variables:
                lines.append(f'{self.indent()}{modifiers}{self.generate_field_variable(var)};')
        return '\n'.join(lines)

    def generate_field_variable(self, var: VariableDeclarator) -> str:
        type_str = self._type_converter.convert(variable_type(self._ctx.declared_type, var))
        code = f'{var.name}: {type_str}'
        if var.initializer is None:
            return code
        if self._ctx.current_is_interface:
            self._ctx.diagnostics.warn_unsupported_construct(
                'interface constant',
                f'initializer of {self._ctx.current_class_name}.{var.name} dropped',
                self._ctx.current_file_path,
                self._line(var),
            )
            return code
        return f'{code} = {self._expr.generate(var.initializer)}'

    # =========================================================================
    # INITIALIZERS
    # =========================================================================

    def generate_initializer(self, init: InitializerDeclaration) -> str:
        """Generate a `static { ... }` block."""
        if not init.is_static:
            raise UnsupportedConstructError(
                'instance initializer',
                f'in {self._ctx.current_class_name} at line {self._line(init)}',
            )
        with self._ctx.method_body():
            body = self._stmt.generate_block(init.body, inline=True)
        return f'{self.indent()}static {body}'

    # =========================================================================
    # ENUMS
    # =========================================================================

    def generate_enum(self, decl: EnumDeclaration) -> str:
        """Generate a TypeScript enum from a Java enum with plain constants.

        Raises:
            UnsupportedConstructError: If the enum has members, or constants
                with arguments or class bodies
        """
        if decl.members:
            raise UnsupportedConstructError('enum', f'{decl.name} declares members')
        for constant in decl.constants:
            if constant.arguments or constant.body is not None:
                raise UnsupportedConstructError(
                    'enum', f'constant {decl.name}.{constant.name} has arguments or a body'
                )
        if decl.implements:
            self._ctx.diagnostics.warn_unsupported_construct(
                'enum implements',
                f'implemented types of {decl.name} dropped',
                self._ctx.current_file_path,
                self._line(decl),
            )

        lines = []
        annotation_line = self._callbacks.annotations_line(self._func.annotation_texts(decl.annotations))
        if annotation_line:
            lines.append(f'{self.indent()}{annotation_line}')

        modifiers = render_modifiers(
            [m for m in decl.modifiers if m is not Modifier.FINAL],
            ModifierContext.TYPE,
            top_level=self._ctx.top_level,
        )
        self.indent_level += 1
        constants = self.render_children(
            decl,
            decl.constants,
            lambda c: self.with_comment(c, f'{self.indent()}{c.name},'),
        )
        self.indent_level -= 1

        if not constants:
            lines.append(f'{self.indent()}{modifiers}enum {decl.name} {{}}')
        else:
            lines.append(f'{self.indent()}{modifiers}enum {decl.name} {{')
            lines.extend(constants)
            lines.append(f'{self.indent()}}}')
        return '\n'.join(lines)
