"""
Comment recovery for parsed Java compilation units.

The Java front end discards ordinary comments, so they are recovered by
scanning the raw source text (skipping string and character literals) and
attached to the tree afterwards.

Attachment works per container: the compilation unit, class and enum
bodies, and statement blocks. A comment belongs to the innermost container
whose braces enclose it. Inside that container it becomes the leading
comment of the first child that starts after it. A comment that follows the
last child, or that is displaced by a later comment before the same child,
becomes one of the container's orphan comments, which the generator emits
in the gap where they occurred.
"""

import bisect
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .ast_nodes import (
    ASTNode,
    BlockStatement,
    ClassDeclaration,
    Comment,
    CompilationUnit,
    ConstructorDeclaration,
    EnumDeclaration,
    InitializerDeclaration,
    MethodDeclaration,
    Position,
)
from .walker import iter_child_nodes


@dataclass(frozen=True)
class BracePair:
    """Matching `{` and `}` positions."""
    open: Position
    close: Position

    def contains(self, position: Position) -> bool:
        return self.open < position < self.close


@dataclass
class ScanResult:
    """Comments and brace pairs of one source file, in source order."""
    comments: List[Comment]
    braces: List[BracePair]


# =============================================================================
# SCANNING
# =============================================================================

def scan(source: str) -> ScanResult:
    """Find every comment and matched brace pair in Java source text.

    Args:
        source: The Java source

    Returns:
        The comments (content without delimiters) and brace pairs, each
        ordered by start position
    """
    comments: List[Comment] = []
    braces: List[BracePair] = []
    open_braces: List[Position] = []

    line, column = 1, 1
    i, n = 0, len(source)

    def advance(count: int) -> None:
        nonlocal i, line, column
        for ch in source[i:i + count]:
            if ch == '\n':
                line += 1
                column = 1
            else:
                column += 1
        i += count

    while i < n:
        ch = source[i]
        start = Position(line, column)

        if source.startswith('//', i):
            end = source.find('\n', i)
            end = n if end == -1 else end
            comments.append(Comment(source[i + 2:end].rstrip('\r'), 'line', start))
            advance(end - i)
        elif source.startswith('/*', i):
            end = source.find('*/', i + 2)
            end = n if end == -1 else end
            if source.startswith('/**', i) and not source.startswith('/**/', i):
                comments.append(Comment(source[i + 3:end], 'javadoc', start))
            else:
                comments.append(Comment(source[i + 2:end], 'block', start))
            advance(min(end + 2, n) - i)
        elif ch == '"' or ch == "'":
            advance(_literal_length(source, i))
        elif ch == '{':
            open_braces.append(start)
            advance(1)
        elif ch == '}':
            if open_braces:
                braces.append(BracePair(open_braces.pop(), start))
            advance(1)
        else:
            advance(1)

    braces.sort(key=lambda b: b.open)
    return ScanResult(comments, braces)


def _literal_length(source: str, start: int) -> int:
    """Length of the string or char literal starting at ``start``."""
    quote = source[start]
    i = start + 1
    while i < len(source):
        ch = source[i]
        if ch == '\\':
            i += 2
            continue
        if ch == quote or ch == '\n':
            return i - start + 1
        i += 1
    return len(source) - start


# =============================================================================
# ATTACHMENT
# =============================================================================

def line_level_children(node: ASTNode) -> Optional[Sequence[ASTNode]]:
    """The children a container renders on their own lines, or None for non-containers."""
    if isinstance(node, CompilationUnit):
        header: List[ASTNode] = [node.package] if node.package is not None else []
        return header + list(node.imports) + list(node.types)
    if isinstance(node, ClassDeclaration):
        return node.members
    if isinstance(node, EnumDeclaration):
        return list(node.constants) + list(node.members)
    if isinstance(node, BlockStatement):
        return node.statements
    return None


def _iter_containers(
    node: ASTNode, anchor: Optional[Position] = None
) -> Iterator[Tuple[ASTNode, Sequence[ASTNode], Optional[Position]]]:
    """Yield (container, children, anchor) for every container in the tree.

    The anchor is the position from which a container's opening brace is
    searched when it has no positioned children; bodies of methods,
    constructors and initializers are anchored at their declaration.
    """
    children = line_level_children(node)
    if children is not None:
        yield node, children, node.position or anchor
    for child in iter_child_nodes(node):
        child_anchor = None
        if isinstance(node, (MethodDeclaration, ConstructorDeclaration, InitializerDeclaration)):
            child_anchor = node.position
        yield from _iter_containers(child, child_anchor)


class CommentAttacher:
    """Distributes scanned comments over a compilation unit."""

    def __init__(self, scan_result: ScanResult):
        self._braces = scan_result.braces
        self._comments = scan_result.comments
        self._opens = [b.open for b in self._braces]

    def _span(self, children: Sequence[ASTNode], anchor: Optional[Position]) -> Optional[BracePair]:
        """The brace pair enclosing a container's children."""
        first = next((c.position for c in children if c.position is not None), None)
        if first is not None:
            # The last brace opened before the first child and still open at it.
            index = bisect.bisect_left(self._opens, first) - 1
            while index >= 0:
                pair = self._braces[index]
                if pair.contains(first):
                    return pair
                index -= 1
            return None
        if anchor is not None:
            index = bisect.bisect_left(self._opens, anchor)
            if index < len(self._braces):
                return self._braces[index]
        return None

    def attach(self, unit: CompilationUnit) -> CompilationUnit:
        """Attach every comment to ``unit`` or one of its descendants, in place."""
        spans: List[Tuple[BracePair, ASTNode, Sequence[ASTNode]]] = []
        unit_children: Sequence[ASTNode] = ()
        for container, children, anchor in _iter_containers(unit):
            if container is unit:
                unit_children = children
                continue
            span = self._span(children, anchor)
            if span is not None:
                spans.append((span, container, children))

        owners: Dict[Position, Tuple[ASTNode, Sequence[ASTNode]]] = {}
        for span, container, children in spans:
            # Outer containers can share a span with an unpositioned inner one; first wins.
            owners.setdefault(span.open, (container, children))

        for comment in self._comments:
            container, children = unit, unit_children
            best: Optional[BracePair] = None
            for span, _, _ in spans:
                if comment.position is not None and span.contains(comment.position):
                    if best is None or best.open < span.open:
                        best = span
            if best is not None:
                container, children = owners[best.open]
            self._attach_one(comment, container, children)
        return unit

    def _attach_one(self, comment: Comment, container: ASTNode, children: Sequence[ASTNode]) -> None:
        following = next(
            (c for c in children if c.position is not None and comment.position < c.position),
            None,
        )
        if following is None:
            container.orphan_comments.append(comment)
            return
        if following.comment is not None:
            # The comment nearest the child leads it; earlier ones become orphans.
            container.orphan_comments.append(following.comment)
        following.comment = comment


def attach_comments(unit: CompilationUnit, source: str) -> CompilationUnit:
    """Scan ``source`` for comments and attach them to ``unit``."""
    return CommentAttacher(scan(source)).attach(unit)
