"""
Import generation for Java to TypeScript transpilation.

By the time the generator runs, the pass selector has already rewritten the
unit's import list into TypeScript terms. This module only renders the
package line and each import through the configured callbacks.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .callbacks import GeneratorCallbacks
    from .context import CodeGenerationContext

from .base import BaseGenerator
from ..parser.ast_nodes import ImportDeclaration, PackageDeclaration


class ImportGenerator(BaseGenerator):
    """
    Generates the package line and TypeScript import statements.
    """

    def __init__(self, ctx: 'CodeGenerationContext', callbacks: 'GeneratorCallbacks'):
        """
        Initialize the import generator.

        Args:
            ctx: The code generation context
            callbacks: Rendering hooks for the package line and imports
        """
        super().__init__(ctx)
        self._callbacks = callbacks

    def generate_package(self, package: PackageDeclaration) -> str:
        """Render the package line, or '' when the callback emits none."""
        line = self._callbacks.package_line(package.name)
        if not line:
            return self.render_comment(package.comment) if package.comment else ''
        return self.with_comment(package, line)

    def generate_import(self, decl: ImportDeclaration) -> str:
        """Render one import line, or '' when the callback emits none."""
        line: Optional[str] = self._callbacks.import_line(decl)
        if not line:
            return self.render_comment(decl.comment) if decl.comment else ''
        return self.with_comment(decl, line)
