"""
Stack-disciplined builder for the concrete syntax tree.

Productions open a Marker before the first token of a construct and later
close it as a node kind, close it as an error, or drop it. Markers nest like
a stack: only the innermost open marker may be closed or dropped. Tokens
consumed through ``TreeBuilder.advance`` become TOKEN leaves of the innermost
open marker.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .errors import TreeBuilderError
from .lexer import Token, TokenType
from .syntax import Diagnostic, HighlightTag, NodeKind, SyntaxNode
from .token_source import TokenSource


@dataclass
class _Frame:
    """Bookkeeping for one open marker."""

    marker: Marker
    start: int
    start_token: Token
    end: int
    children: list[SyntaxNode] = field(default_factory=list)


class Marker:
    """Handle on an in-progress node."""

    def __init__(self, builder: TreeBuilder):
        self._builder = builder
        self.done = False

    def close(self, kind: NodeKind, tags: Iterable[HighlightTag] = ()) -> SyntaxNode:
        """Close the node as ``kind``; its children stay in the tree."""
        return self._builder._close(self, kind, tags=list(tags))

    def error(self, message: str) -> SyntaxNode:
        """Close the node as an error node carrying ``message``."""
        return self._builder._close(self, NodeKind.ERROR, message=message)

    def drop(self) -> None:
        """Discard the marker; its children move up to the enclosing node."""
        self._builder._drop(self)


class TreeBuilder:
    """
    Builds a SyntaxNode tree from marker calls made during a parse.

    The builder reads positions from the TokenSource it wraps. Speculative
    scans may move the source directly and roll it back; only tokens consumed
    through ``advance`` reach the tree.
    """

    def __init__(self, source: TokenSource):
        self.source = source
        self.diagnostics: list[Diagnostic] = []
        self._stack: list[_Frame] = []

    def open(self) -> Marker:
        """Open a marker at the current token."""
        marker = Marker(self)
        token = self.source.current_token()
        start = token.offset
        self._stack.append(_Frame(marker=marker, start=start, start_token=token, end=start))
        return marker

    def advance(self) -> None:
        """Consume the current token as a leaf of the innermost open marker."""
        if not self._stack:
            raise TreeBuilderError("Cannot consume a token with no open marker")
        token = self.source.advance()
        if token.type == TokenType.EOF:
            return
        frame = self._stack[-1]
        frame.children.append(
            SyntaxNode(
                kind=NodeKind.TOKEN,
                start=token.offset,
                end=token.end,
                token_type=token.type,
                text=token.value,
            )
        )
        frame.end = token.end

    def finish(self, marker: Marker, kind: NodeKind = NodeKind.SCHEMA_FILE) -> SyntaxNode:
        """
        Close the outermost marker and return the finished tree.

        The root always spans the whole input, from offset 0 to end of text.
        """
        if len(self._stack) != 1 or self._stack[0].marker is not marker:
            raise TreeBuilderError("finish() requires the root marker to be the only open marker")
        frame = self._stack[0]
        frame.start = 0
        frame.end = max(frame.end, self.source.tokens[-1].offset)
        return self._close(marker, kind)

    def _top(self, marker: Marker) -> _Frame:
        if marker.done:
            raise TreeBuilderError("Marker already closed")
        if not self._stack or self._stack[-1].marker is not marker:
            raise TreeBuilderError("Only the innermost open marker can be closed")
        return self._stack[-1]

    def _close(
        self,
        marker: Marker,
        kind: NodeKind,
        tags: list[HighlightTag] | None = None,
        message: str | None = None,
    ) -> SyntaxNode:
        frame = self._top(marker)
        self._stack.pop()
        marker.done = True

        end = max([frame.end] + [child.end for child in frame.children])
        node = SyntaxNode(
            kind=kind,
            start=frame.start,
            end=end,
            children=frame.children,
            message=message,
            tags=tags or [],
        )
        if message is not None:
            self.diagnostics.append(
                Diagnostic(
                    message=message,
                    start=node.start,
                    end=node.end,
                    line=frame.start_token.line,
                    column=frame.start_token.column,
                )
            )
        if self._stack:
            parent = self._stack[-1]
            parent.children.append(node)
            parent.end = max(parent.end, node.end)
        return node

    def _drop(self, marker: Marker) -> None:
        frame = self._top(marker)
        self._stack.pop()
        marker.done = True
        if self._stack:
            parent = self._stack[-1]
            parent.children.extend(frame.children)
            parent.end = max(parent.end, frame.end)
