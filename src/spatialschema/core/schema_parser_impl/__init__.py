"""
Schema Parser Package.

This package provides a modular, error-tolerant recursive-descent parser for
the schema language. The parser is built using mixins to separate parsing
logic by construct type.

The main exports are:
- Parser: The complete parser class
- parse_tokens: Parse an already-lexed token stream into a tree

Usage:
    from spatialschema.core.parser import parse_schema

    result = parse_schema(text)
    for diagnostic in result.diagnostics:
        print(diagnostic.format())
"""

from pathlib import Path

from ..config import ParserOptions
from ..lexer import Token
from ..syntax import Diagnostic, NodeKind, SyntaxNode
from .annotation import AnnotationParserMixin
from .base import BaseParser, Construct, ParserProtocol
from .component import ComponentParserMixin
from .definitions import DefinitionParserMixin
from .statements import StatementParserMixin
from .types import TypeParserMixin


class Parser(
    BaseParser,
    StatementParserMixin,
    TypeParserMixin,
    ComponentParserMixin,
    DefinitionParserMixin,
    AnnotationParserMixin,
):
    """
    Complete schema parser.

    This class composes all parser mixins. Each mixin provides parsing for a
    specific construct type:

    - StatementParserMixin: package, import, option and component id
    - TypeParserMixin: type references, fields and enum values
    - ComponentParserMixin: data, event and command declarations
    - DefinitionParserMixin: top-level dispatch and enum/type/component blocks
    - AnnotationParserMixin: annotations and their field values
    """

    def parse(self) -> SyntaxNode:
        """
        Parse the whole token stream.

        Returns:
            SCHEMA_FILE root node spanning the entire input
        """
        root = self.builder.open()
        while not self.source.eof():
            self.parse_top_level_definition()
        return self.builder.finish(root, NodeKind.SCHEMA_FILE)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.builder.diagnostics


def parse_tokens(
    tokens: list[Token],
    file: Path | None = None,
    options: ParserOptions | None = None,
) -> tuple[SyntaxNode, list[Diagnostic]]:
    """
    Parse a token stream.

    Args:
        tokens: Tokens from the lexer, ending with EOF
        file: Source file path
        options: Parser behaviour switches

    Returns:
        Tuple of (root node, diagnostics in source order)
    """
    parser = Parser(tokens, file, options)
    root = parser.parse()
    return root, list(parser.diagnostics)


__all__ = [
    "Parser",
    "parse_tokens",
    "BaseParser",
    "Construct",
    "ParserProtocol",
    "StatementParserMixin",
    "TypeParserMixin",
    "ComponentParserMixin",
    "DefinitionParserMixin",
    "AnnotationParserMixin",
]
