"""
Lombok logging pass.

Removes `@Slf4j` and sends the `log` field it would have generated to the
console: `log.info(...)` becomes `console.info(...)`.
"""

from ..parser.ast_nodes import Annotation, MethodCall, Name
from .base import TransformPass
from .mappings import CONSOLE_LOG_LEVELS


class LombokLoggingPass(TransformPass):
    """Remove `lombok.extern.slf4j.Slf4j` annotations."""

    def visit_Annotation(self, node: Annotation):
        if node.simple_name == 'Slf4j':
            return None
        return node

    def visit_MethodCall(self, node: MethodCall) -> MethodCall:
        self.generic_visit(node)
        if (
            isinstance(node.target, Name)
            and node.target.identifier == 'log'
            and node.name in CONSOLE_LOG_LEVELS
        ):
            node.target = Name('console', position=node.target.position)
        return node
