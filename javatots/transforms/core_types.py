"""
Scalar type mapping pass.

Renames Java primitive and boxed types (`String`, `int`, `Integer`, ...) to
their TypeScript scalar types. This pass always runs, and runs first.
"""

from ..parser.ast_nodes import ClassType, ObjectCreation, PrimitiveType, TypeNode
from .base import TransformContext, TransformPass
from .mappings import build_scalar_map


class CoreTypesPass(TransformPass):
    """Change Java scalar types to the corresponding TypeScript scalar types."""

    def __init__(self, ctx: TransformContext):
        super().__init__(ctx)
        self._scalar_map = build_scalar_map(ctx.type_mappings)

    def visit_ClassType(self, node: ClassType) -> TypeNode:
        self.generic_visit(node)
        if node.scope is None or node.scope.qualified_name == 'java.lang':
            mapped = self._scalar_map.get(node.name)
            if mapped is not None and not node.type_arguments:
                return ClassType(mapped, position=node.position)
        return node

    def visit_PrimitiveType(self, node: PrimitiveType) -> TypeNode:
        mapped = self._scalar_map.get(node.name)
        if mapped is None:
            return node
        return ClassType(mapped, position=node.position)

    def visit_ObjectCreation(self, node: ObjectCreation) -> ObjectCreation:
        # `new String(...)` keeps its constructor name; only type arguments map.
        if node.type.type_arguments:
            self.generic_visit(node.type)
        for i, arg in enumerate(node.arguments):
            node.arguments[i] = self.visit(arg)
        if node.body is not None:
            node.body[:] = [self.visit(member) for member in node.body]
        return node
