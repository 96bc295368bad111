"""
Shared infrastructure for transform passes.

A pass is a NodeTransformer that rewrites one compilation unit in place. Import
declarations are finalized before any pass runs, so passes never descend into
them.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..codegen.diagnostics import TranspilerDiagnostics
from ..parser.ast_nodes import CompilationUnit, ImportDeclaration, PackageDeclaration
from ..parser.walker import NodeTransformer


@dataclass
class TransformContext:
    """Per-unit inputs shared by all passes."""
    type_mappings: Dict[str, str] = field(default_factory=dict)
    file_path: str = ''
    diagnostics: Optional[TranspilerDiagnostics] = None

    def __post_init__(self):
        if self.diagnostics is None:
            self.diagnostics = TranspilerDiagnostics()


class TransformPass(NodeTransformer):
    """Base class for whole-tree rewrites."""

    def __init__(self, ctx: TransformContext):
        self._ctx = ctx

    def run(self, unit: CompilationUnit) -> CompilationUnit:
        """Apply this pass to ``unit``."""
        return self.visit(unit)

    def visit_ImportDeclaration(self, node: ImportDeclaration) -> ImportDeclaration:
        return node

    def visit_PackageDeclaration(self, node: PackageDeclaration) -> PackageDeclaration:
        return node
