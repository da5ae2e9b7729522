"""
Highlight side-channel for schema syntax trees.

Two pieces:
- tag builders used by the parser when it consumes a dotted name, producing
  HighlightTag ranges relative to the token's own text;
- ``highlight_ranges`` which flattens a finished tree into absolute
  (start, end, category) ranges a host can paint.

Hosts are free to ignore all of this.
"""

from __future__ import annotations

from dataclasses import dataclass

from .lexer import TokenType
from .syntax import HighlightCategory, HighlightTag, NodeKind, SyntaxNode


def dotted_segment_tags(
    text: str, category: HighlightCategory = HighlightCategory.METADATA
) -> list[HighlightTag]:
    """
    Tag every dot-separated segment of ``text`` with ``category``.

    The dots themselves are left untagged, so ``a.b.c`` yields the ranges
    (0, 1), (2, 3) and (4, 5).
    """
    tags: list[HighlightTag] = []
    segment_start = 0
    for i, ch in enumerate(text):
        if ch == ".":
            tags.append(HighlightTag(start=segment_start, end=i, category=category))
            segment_start = i + 1
    tags.append(HighlightTag(start=segment_start, end=len(text), category=category))
    return tags


def enum_reference_tags(text: str, dot: int) -> list[HighlightTag]:
    """Tag ``Enum.VALUE``: the enum part as metadata, the value part as a number."""
    return [
        HighlightTag(start=0, end=dot, category=HighlightCategory.METADATA),
        HighlightTag(start=dot + 1, end=len(text), category=HighlightCategory.NUMBER),
    ]


# Categories for whole nodes; tagged nodes use their own tags instead
NODE_CATEGORIES: dict[NodeKind, HighlightCategory] = {
    NodeKind.KEYWORD: HighlightCategory.KEYWORD,
    NodeKind.DEFINITION_NAME: HighlightCategory.IDENTIFIER,
    NodeKind.TYPE_NAME: HighlightCategory.TYPE,
    NodeKind.TYPE_PARAMETER_NAME: HighlightCategory.TYPE,
    NodeKind.FIELD_NUMBER: HighlightCategory.NUMBER,
    NodeKind.IMPORT_FILENAME: HighlightCategory.STRING,
    NodeKind.OPTION_VALUE: HighlightCategory.NUMBER,
}

TOKEN_CATEGORIES: dict[TokenType, HighlightCategory] = {
    TokenType.STRING: HighlightCategory.STRING,
    TokenType.INTEGER: HighlightCategory.NUMBER,
    TokenType.BAD_CHARACTER: HighlightCategory.ERROR,
}


@dataclass(frozen=True)
class HighlightRange:
    """An absolute range of source text and its display category."""

    start: int
    end: int
    category: HighlightCategory


def highlight_ranges(root: SyntaxNode) -> list[HighlightRange]:
    """
    Flatten a syntax tree into non-overlapping highlight ranges.

    The outermost categorised leaf-level node wins; a node with tags
    contributes its tags (shifted to absolute offsets) instead of a single
    range.
    """
    ranges: list[HighlightRange] = []
    _collect(root, ranges)
    return ranges


def _collect(node: SyntaxNode, ranges: list[HighlightRange]) -> None:
    if node.tags:
        for tag in node.tags:
            ranges.append(
                HighlightRange(node.start + tag.start, node.start + tag.end, tag.category)
            )
        return
    category = NODE_CATEGORIES.get(node.kind)
    if category is None and node.is_token and node.token_type is not None:
        category = TOKEN_CATEGORIES.get(node.token_type)
    # A categorised node with structure below it (a generic name, a tagged
    # reference) defers to its children
    if node.child_kinds():
        category = None
    if category is not None and node.end > node.start:
        ranges.append(HighlightRange(node.start, node.end, category))
        return
    for child in node.children:
        _collect(child, ranges)
