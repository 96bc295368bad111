"""
Type conversion utilities for Java to TypeScript transpilation.

This module renders type reference nodes as TypeScript type syntax. By the
time it runs, the transform passes have already renamed scalar, container
and stream types; what remains is generic syntax, arrays, unions and the
Optional marker.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from .base import BaseGenerator
from ..errors import GeneratorStateError
from ..parser.ast_nodes import (
    ArrayType,
    ClassType,
    PrimitiveType,
    TypeMarker,
    TypeNode,
    TypeParameter,
    UnionType,
    VoidType,
    WildcardType,
)


# TypeScript types that `instanceof` cannot test; `typeof` is used instead.
TYPEOF_TYPES = frozenset({'string', 'number', 'boolean'})


class TypeConverter(BaseGenerator):
    """
    Converts type reference nodes to TypeScript type strings.
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        super().__init__(ctx)

    def convert(self, type_node: TypeNode) -> str:
        """Convert a type node to its TypeScript spelling.

        Args:
            type_node: The type reference

        Returns:
            The TypeScript type string
        """
        if isinstance(type_node, ClassType):
            return self._convert_class_type(type_node)
        if isinstance(type_node, ArrayType):
            element = self.convert(type_node.element_type)
            if ' | ' in element:
                element = f'({element})'
            return element + '[]' * type_node.dimensions
        if isinstance(type_node, PrimitiveType):
            return type_node.name
        if isinstance(type_node, VoidType):
            return 'void'
        if isinstance(type_node, UnionType):
            return ' | '.join(self.convert(t) for t in type_node.elements)
        if isinstance(type_node, WildcardType):
            if type_node.bound is not None and type_node.kind == 'extends':
                return self.convert(type_node.bound)
            return 'any'
        return 'any'

    def _convert_class_type(self, type_node: ClassType) -> str:
        if type_node.marker is TypeMarker.OR_NULL:
            # Optional<T> renders as `T | null`
            if not type_node.type_arguments or len(type_node.type_arguments) != 1:
                raise GeneratorStateError(
                    'Optional type',
                    f'expected exactly one type argument for {type_node.qualified_name}',
                )
            return f'{self.convert(type_node.type_arguments[0])} | null'

        name = type_node.qualified_name
        if type_node.type_arguments:
            args = ', '.join(self.convert(t) for t in type_node.type_arguments)
            return f'{name}<{args}>'
        return name

    def convert_type_parameters(self, params: List[TypeParameter]) -> str:
        """Render a type parameter list such as `<K, V extends Foo>`."""
        if not params:
            return ''
        rendered = []
        for param in params:
            if param.bounds:
                bounds = ' & '.join(self.convert(b) for b in param.bounds)
                rendered.append(f'{param.name} extends {bounds}')
            else:
                rendered.append(param.name)
        return f'<{", ".join(rendered)}>'

    def runtime_name(self, type_node: TypeNode) -> str:
        """The name usable at runtime (in `instanceof` or `new`), without type arguments."""
        if isinstance(type_node, ClassType):
            return type_node.qualified_name
        if isinstance(type_node, ArrayType):
            return 'Array'
        return self.convert(type_node)

    def is_typeof_type(self, type_node: TypeNode) -> bool:
        """Check whether a type is tested with `typeof` rather than `instanceof`."""
        return self.runtime_name(type_node) in TYPEOF_TYPES
