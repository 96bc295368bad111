"""
Built-in call rewriting pass.

- `a.equals(b)` becomes the binary expression `a == b`
- `System.out.println(x)` becomes `console.log(x)`
- `System.err.println(x)` becomes `console.error(x)`
- `System.out.print(x)` becomes `process.stdout.write(x)` (and likewise for err)
"""

from ..parser.ast_nodes import (
    BinaryExpression,
    Expression,
    FieldAccess,
    MethodCall,
    Name,
)
from .base import TransformPass
from .mappings import SYSTEM_STREAMS


class BuiltinCallsPass(TransformPass):
    """Map built-in Java calls to their TypeScript idioms."""

    def visit_MethodCall(self, node: MethodCall) -> Expression:
        self.generic_visit(node)

        if node.name == 'equals':
            if node.target is not None and len(node.arguments) == 1:
                return BinaryExpression('==', node.target, node.arguments[0], position=node.position)
            return node

        target = node.target
        if (
            isinstance(target, FieldAccess)
            and isinstance(target.target, Name)
            and target.target.identifier == 'System'
            and target.name in SYSTEM_STREAMS
        ):
            console_method, process_stream = SYSTEM_STREAMS[target.name]
            if node.name == 'println':
                node.target = Name('console')
                node.name = console_method
            elif node.name == 'print':
                node.target = FieldAccess(Name('process'), process_stream)
                node.name = 'write'
        return node
