"""
Optional marking pass.

Tags `Optional<T>` type references so the code generator renders them as
`T | null`, and rewrites the Optional factory calls to the plain values they
wrap.
"""

from ..parser.ast_nodes import ClassType, Expression, Literal, MethodCall, Name, TypeMarker
from .base import TransformPass


class OptionalPass(TransformPass):
    """Mark java.util.Optional<X> for rendering as `X | null`."""

    def visit_ClassType(self, node: ClassType) -> ClassType:
        self.generic_visit(node)
        if node.name == 'Optional':
            node.marker = TypeMarker.OR_NULL
        return node

    def visit_MethodCall(self, node: MethodCall) -> Expression:
        self.generic_visit(node)
        if not (isinstance(node.target, Name) and node.target.identifier == 'Optional'):
            return node
        if node.name == 'empty' and not node.arguments:
            return Literal('null', position=node.position)
        if node.name in ('of', 'ofNullable') and len(node.arguments) == 1:
            return node.arguments[0]
        return node
