"""
Base parser class for the schema language.

Provides the token helpers used by all parser mixins and the single error
recovery routine every production reports through.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..config import ParserOptions
from ..lexer import Token, TokenType
from ..syntax import HighlightTag, NodeKind
from ..token_source import TokenSource
from ..tree_builder import Marker, TreeBuilder

logger = logging.getLogger(__name__)

KEYWORD_PACKAGE = "package"
KEYWORD_IMPORT = "import"
KEYWORD_ENUM = "enum"
KEYWORD_TYPE = "type"
KEYWORD_COMPONENT = "component"
KEYWORD_OPTION = "option"
KEYWORD_ID = "id"
KEYWORD_DATA = "data"
KEYWORD_EVENT = "event"
KEYWORD_COMMAND = "command"
KEYWORD_ANNOTATION_START = "["

# Field numbers are 32-bit signed in the schema language
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class Construct(Enum):
    """Recovery context: decides which tokens end an error scan."""

    STATEMENT = "statement"
    BRACES = "braces"
    TOP_LEVEL = "top_level"


@runtime_checkable
class ParserProtocol(Protocol):
    """
    Protocol defining the interface available to parser mixins.

    Mixins are combined with BaseParser in the final Parser class; this lets
    type checkers see the shared helpers and cross-mixin productions.
    """

    source: TokenSource
    builder: TreeBuilder
    options: ParserOptions
    file: Path | None

    def at(self, token_type: TokenType) -> bool: ...
    def at_keyword(self, keyword: str) -> bool: ...
    def token_text(self) -> str: ...
    def identifier_text(self) -> str: ...
    def integer_value(self) -> int: ...
    def string_value(self) -> str: ...
    def consume_as(self, kind: NodeKind | None, tags: list[HighlightTag] | None = None) -> None: ...
    def recover(
        self, marker: Marker | None, kind: NodeKind | None, construct: Construct, message: str
    ) -> None: ...

    # Productions called across mixins
    def parse_type_name(
        self, marker: Marker, failed_kind: NodeKind, construct: Construct = ...
    ) -> str | None: ...
    def parse_option_definition(self) -> None: ...
    def parse_field_definition(self) -> None: ...
    def parse_enum_definition(self) -> None: ...
    def parse_type_definition(self) -> None: ...
    def parse_annotation(self) -> None: ...


class BaseParser:
    """
    Base parser class with token helpers and error recovery.

    The parser never raises on malformed input. A production that fails calls
    ``recover``, which closes the production's partial node, records one error
    node and skips to a synchronization boundary.
    """

    def __init__(
        self,
        tokens: list[Token],
        file: Path | None = None,
        options: ParserOptions | None = None,
    ):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer, ending with EOF
            file: Source file path (for logging and diagnostics)
            options: Parser behaviour switches
        """
        self.file = file
        self.options = options or ParserOptions()
        self.source = TokenSource(tokens)
        self.builder = TreeBuilder(self.source)

    def at(self, token_type: TokenType) -> bool:
        """Check whether the current token has the given type."""
        return self.source.current_type() == token_type

    def at_keyword(self, keyword: str) -> bool:
        """
        Check whether the current token is the identifier ``keyword``.

        Keywords are plain identifiers; they only act as keywords where a
        production checks for their spelling.
        """
        return self.at(TokenType.IDENTIFIER) and self.source.current_text() == keyword

    def token_text(self) -> str:
        """Current token text for messages, ``<EOF>`` at end of input."""
        text = self.source.current_text()
        return "<EOF>" if text is None else text

    def identifier_text(self) -> str:
        text = self.source.current_text()
        return "" if text is None else text

    def integer_value(self) -> int:
        """
        Current token as an integer.

        Text that does not parse, or does not fit a signed 32-bit integer,
        yields 0. Numbers are only echoed in messages, never validated here.
        """
        text = self.source.current_text()
        if text is None:
            return 0
        try:
            value = int(text)
        except ValueError:
            return 0
        if value < _INT_MIN or value > _INT_MAX:
            return 0
        return value

    def string_value(self) -> str:
        """Current string token without its quotes."""
        text = self.source.current_text()
        if text is None:
            return ""
        if self.options.legacy_quote_stripping:
            # Older tooling dropped one character past the closing quote
            return text[1:-2]
        inner = text[1:]
        if len(text) > 1 and inner.endswith('"'):
            inner = inner[:-1]
        return inner

    def consume_as(self, kind: NodeKind | None, tags: list[HighlightTag] | None = None) -> None:
        """
        Consume the current token, wrapped in a node of ``kind`` if given.

        With ``kind=None`` the token becomes a bare leaf of the enclosing node.
        """
        if kind is None:
            self.builder.advance()
            return
        marker = self.builder.open()
        self.builder.advance()
        marker.close(kind, tags or [])

    def recover(
        self,
        marker: Marker | None,
        kind: NodeKind | None,
        construct: Construct,
        message: str,
    ) -> None:
        """
        Report ``message`` and skip input up to a synchronization boundary.

        ``marker`` (the failed production's node, if one was opened) is closed
        as ``kind`` so its parsed children stay in the tree. A new error node
        then collects tokens until the boundary for ``construct``:

        - STATEMENT: stop after ';', or before '}' (left for the enclosing block)
        - BRACES: stop after '}'
        - TOP_LEVEL: stop after ';' or '}'

        The boundary token itself is consumed outside the error node. At end
        of input the error node closes where it is.
        """
        if marker is not None and kind is not None:
            marker.close(kind)

        token = self.source.current_token()
        logger.debug(
            "%s:%d:%d: recovering (%s): %s",
            self.file or "<input>",
            token.line,
            token.column,
            construct.value,
            message,
        )

        error_marker = self.builder.open()
        while not self.source.eof():
            if construct in (Construct.STATEMENT, Construct.TOP_LEVEL) and self.at(
                TokenType.SEMICOLON
            ):
                error_marker.error(message)
                self.builder.advance()
                return
            if construct in (Construct.BRACES, Construct.TOP_LEVEL) and self.at(TokenType.RBRACE):
                error_marker.error(message)
                self.builder.advance()
                return
            if construct == Construct.STATEMENT and self.at(TokenType.RBRACE):
                error_marker.error(message)
                return
            self.builder.advance()
        error_marker.error(message)
