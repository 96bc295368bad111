"""
Byte and character stream substitution passes.

e.g. `InputStream in = new FileInputStream(path);`
  -> `let in: Readable = Fs.createReadStream(path);`

e.g. `StringWriter writer = new StringWriter();`
  -> `let writer: Writable = new Writable();`

The `fs` and `stream` imports these rewrites depend on are emitted by the
pass registry when it enqueues the pass.
"""

from ..parser.ast_nodes import ClassType, Expression, MethodCall, Name, ObjectCreation
from .base import TransformPass
from .mappings import FILE_INPUT_STREAM_TYPES, STRING_WRITER_TYPES


class FileInputStreamPass(TransformPass):
    """Change java.io.FileInputStream to a Node.js Readable."""

    def visit_ObjectCreation(self, node: ObjectCreation) -> Expression:
        if node.type.name == 'FileInputStream' and node.body is None:
            arguments = [self.visit(arg) for arg in node.arguments]
            return MethodCall('createReadStream', arguments, target=Name('Fs'), position=node.position)
        return self.generic_visit(node)

    def visit_ClassType(self, node: ClassType) -> ClassType:
        self.generic_visit(node)
        if node.name in FILE_INPUT_STREAM_TYPES:
            node.name = FILE_INPUT_STREAM_TYPES[node.name]
            node.scope = None
        return node


class StringWriterPass(TransformPass):
    """Change java.io.StringWriter to a Node.js Writable."""

    def visit_ClassType(self, node: ClassType) -> ClassType:
        self.generic_visit(node)
        if node.name in STRING_WRITER_TYPES:
            node.name = STRING_WRITER_TYPES[node.name]
            node.scope = None
        return node
