"""
Container substitution pass.

Renames growable list types to the native TypeScript `Array`.
"""

from ..parser.ast_nodes import ClassType
from .base import TransformPass
from .mappings import CONTAINER_MAP


class ContainersPass(TransformPass):
    """Change java.util.List (and ArrayList) to TypeScript-native Array."""

    def visit_ClassType(self, node: ClassType) -> ClassType:
        self.generic_visit(node)
        if node.name in CONTAINER_MAP:
            node.name = CONTAINER_MAP[node.name]
            node.scope = None
        return node
