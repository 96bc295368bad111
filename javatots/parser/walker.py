"""
Generic traversal over the dataclass tree.

NodeVisitor and NodeTransformer follow the shape of Python's own ``ast``
module: ``visit`` dispatches to ``visit_<ClassName>`` and falls back to
``generic_visit``, which walks every structural field of the node. A
transformer's visit method returns the replacement node; returning None
removes the node from a list field (or clears a scalar field).
"""

from dataclasses import fields
from typing import Any, Iterator, Tuple

from .ast_nodes import ASTNode, METADATA_FIELDS


def iter_fields(node: ASTNode) -> Iterator[Tuple[str, Any]]:
    """Yield ``(name, value)`` for each structural field of ``node``."""
    for f in fields(node):
        if f.name in METADATA_FIELDS:
            continue
        yield f.name, getattr(node, f.name)


def iter_child_nodes(node: ASTNode) -> Iterator[ASTNode]:
    """Yield all direct child nodes of ``node``."""
    for _, value in iter_fields(node):
        if isinstance(value, ASTNode):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, ASTNode):
                    yield item


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Pre-order traversal of ``node`` and all its descendants."""
    yield node
    for child in iter_child_nodes(node):
        yield from walk(child)


class NodeVisitor:
    """Read-only traversal with per-class dispatch."""

    def visit(self, node: ASTNode) -> Any:
        method = getattr(self, f'visit_{type(node).__name__}', None)
        if method is None:
            return self.generic_visit(node)
        return method(node)

    def generic_visit(self, node: ASTNode) -> None:
        for child in iter_child_nodes(node):
            self.visit(child)


class NodeTransformer(NodeVisitor):
    """Traversal that may replace or remove the nodes it visits."""

    def generic_visit(self, node: ASTNode) -> ASTNode:
        for name, value in iter_fields(node):
            if isinstance(value, list):
                new_values = []
                for item in value:
                    if isinstance(item, ASTNode):
                        item = self.visit(item)
                        if item is None:
                            continue
                    new_values.append(item)
                value[:] = new_values
            elif isinstance(value, ASTNode):
                setattr(node, name, self.visit(value))
        return node
