"""
TypeScript code generator façade.

Wires the specialized generators together around one shared context and
renders a whole compilation unit.
"""

from typing import List, Optional

from .callbacks import GeneratorCallbacks
from .context import CodeGenerationContext
from .declaration import DeclarationGenerator
from .diagnostics import TranspilerDiagnostics
from .expression import ExpressionGenerator
from .function import FunctionGenerator
from .imports import ImportGenerator
from .statement import StatementGenerator
from .type_converter import TypeConverter
from ..parser.ast_nodes import ASTNode, CompilationUnit, ImportDeclaration, PackageDeclaration


class TypeScriptCodeGenerator:
    """
    Generates TypeScript source from a transformed Java compilation unit.

    Usage:
        generator = TypeScriptCodeGenerator(default_callbacks(config))
        text = generator.generate(unit, 'src/main/java/a/B.java')
    """

    def __init__(
        self,
        callbacks: Optional[GeneratorCallbacks] = None,
        indent_str: str = '  ',
        comment_final_parameters: bool = False,
        diagnostics: Optional[TranspilerDiagnostics] = None,
    ):
        """
        Initialize the code generator.

        Args:
            callbacks: Rendering hooks; None uses the built-in behavior
            indent_str: One level of indentation
            comment_final_parameters: Leave `/*const*/` where a parameter was final
            diagnostics: Collector for warnings; one is created if None
        """
        self._callbacks = callbacks or GeneratorCallbacks()
        self._ctx = CodeGenerationContext(
            indent_str=indent_str,
            comment_final_parameters=comment_final_parameters,
            _diagnostics=diagnostics,
        )

        self._type_converter = TypeConverter(self._ctx)
        self._expr = ExpressionGenerator(self._ctx, self._type_converter)
        self._stmt = StatementGenerator(self._ctx, self._expr, self._type_converter)
        self._expr.set_statement_generator(self._stmt)
        self._func = FunctionGenerator(
            self._ctx, self._expr, self._stmt, self._type_converter, self._callbacks
        )
        self._decl = DeclarationGenerator(
            self._ctx, self._expr, self._stmt, self._func, self._type_converter, self._callbacks
        )
        self._stmt.set_declaration_generator(self._decl)
        self._imports = ImportGenerator(self._ctx, self._callbacks)

    @property
    def diagnostics(self) -> TranspilerDiagnostics:
        return self._ctx.diagnostics

    def generate(self, unit: CompilationUnit, file_path: str = '') -> str:
        """Render a compilation unit as TypeScript source text.

        The package line and imports come first, then one blank line, then
        the type declarations separated by blank lines.

        Args:
            unit: The transformed compilation unit
            file_path: Source path, for diagnostics

        Returns:
            The TypeScript text, ending with a newline
        """
        self._ctx.reset_for_file(file_path)

        header: List[ASTNode] = []
        if unit.package is not None:
            header.append(unit.package)
        header.extend(unit.imports)

        chunks = self._decl.render_children(unit, header + list(unit.types), self._generate_top_level)
        header_chunks = [c for c in chunks[:len(header)] if c]
        body_chunks = [c for c in chunks[len(header):] if c]

        text = '\n'.join(header_chunks)
        if header_chunks and body_chunks:
            text += '\n\n'
        text += '\n\n'.join(body_chunks)
        return text + '\n'

    def _generate_top_level(self, node: ASTNode) -> str:
        if isinstance(node, PackageDeclaration):
            return self._imports.generate_package(node)
        if isinstance(node, ImportDeclaration):
            return self._imports.generate_import(node)
        return self._decl.generate_type_declaration(node)
