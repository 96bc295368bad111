"""
Base generator class with shared utilities.

This module provides the BaseGenerator class that contains common utilities
used across all specialized generator classes in the code generation pipeline:
indentation, comment rendering and orphan comment placement.
"""

from typing import Callable, List, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from ..parser.ast_nodes import ASTNode, Comment, Position


class BaseGenerator:
    """
    Base class for all code generators.

    Provides shared utilities for:
    - Indentation management
    - Comment rendering
    - Orphan comment placement between a container's children
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        """
        Initialize the base generator.

        Args:
            ctx: The code generation context containing all state
        """
        self._ctx = ctx

    # =========================================================================
    # INDENTATION
    # =========================================================================

    def indent(self) -> str:
        """Return the current indentation string."""
        return self._ctx.indent()

    @property
    def indent_level(self) -> int:
        """Get the current indentation level."""
        return self._ctx.indent_level

    @indent_level.setter
    def indent_level(self, value: int):
        """Set the current indentation level."""
        self._ctx.indent_level = value

    def _line(self, node: Optional[ASTNode]) -> Optional[int]:
        """Source line of a node, for diagnostics."""
        if node is not None and node.position is not None:
            return node.position.line
        return None

    # =========================================================================
    # COMMENTS
    # =========================================================================

    def render_comment(self, comment: Comment) -> str:
        """Render a comment at the current indentation."""
        indent = self.indent()
        if comment.kind == 'line':
            return f'{indent}//{comment.content}'

        opener = '/**' if comment.kind == 'javadoc' else '/*'
        lines = comment.content.split('\n')
        if len(lines) == 1:
            return f'{indent}{opener}{lines[0]}*/'
        rendered = [f'{indent}{opener}{lines[0].rstrip()}']
        for line in lines[1:]:
            stripped = line.strip()
            if stripped.startswith('*'):
                rendered.append(f'{indent} {stripped}'.rstrip())
            elif stripped:
                rendered.append(f'{indent}{stripped}')
            else:
                rendered.append('')
        # The closing delimiter follows the last content line.
        last = rendered[-1]
        if last.strip() in ('', '*'):
            rendered[-1] = f'{indent} */'
        else:
            rendered[-1] = f'{last}*/'
        return '\n'.join(rendered)

    def with_comment(self, node: ASTNode, text: str) -> str:
        """Prefix ``text`` with the node's attached comment, if any."""
        if node.comment is None:
            return text
        return f'{self.render_comment(node.comment)}\n{text}'

    def render_children(
        self,
        container: ASTNode,
        children: Sequence[ASTNode],
        render: Callable[[ASTNode], str],
    ) -> List[str]:
        """Render a container's children with its orphan comments in between.

        Orphan comments are placed in the gap where they occurred: a comment
        positioned before a child is emitted ahead of it, and comments past
        the last child are emitted after it. Children without a position
        never split the comment stream.

        Args:
            container: The node owning ``children`` and the orphan comments
            children: The children, in source order
            render: Renders one child

        Returns:
            One chunk per child (orphans preceding it included), plus a final
            chunk for trailing orphans if there are any
        """
        pending = sorted(
            container.orphan_comments,
            key=lambda c: c.position or Position(0, 0),
        )
        chunks = []
        for child in children:
            leading = []
            if child.position is not None:
                while pending and pending[0].position is not None and pending[0].position < child.position:
                    leading.append(self.render_comment(pending.pop(0)))
            text = render(child)
            if leading:
                text = '\n'.join(leading + [text]) if text else '\n'.join(leading)
            chunks.append(text)
        if pending:
            chunks.append('\n'.join(self.render_comment(c) for c in pending))
        return chunks
