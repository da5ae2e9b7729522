"""
Block definition parser mixin for the schema language.

Parses the top level of a file and the braced enum, type and component
blocks, dispatching each statement inside a block by its leading token.

Syntax:

    package improbable.demo;
    import "improbable/vector3.schema";

    type Coordinates {
      double x = 1;
    }

    [improbable.demo.Tag]
    component Position {
      id = 54;
      data Coordinates;
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..lexer import TokenType
from ..syntax import NodeKind
from .base import (
    KEYWORD_COMMAND,
    KEYWORD_COMPONENT,
    KEYWORD_DATA,
    KEYWORD_ENUM,
    KEYWORD_EVENT,
    KEYWORD_ID,
    KEYWORD_IMPORT,
    KEYWORD_OPTION,
    KEYWORD_PACKAGE,
    KEYWORD_TYPE,
    Construct,
)

TOP_LEVEL_MESSAGE = (
    f"Expected '{KEYWORD_PACKAGE}', '{KEYWORD_IMPORT}', '{KEYWORD_ENUM}', "
    f"'{KEYWORD_TYPE}' or '{KEYWORD_COMPONENT}' definition at top-level."
)


class DefinitionParserMixin:
    """Parser mixin for top-level dispatch and enum/type/component blocks."""

    if TYPE_CHECKING:
        source: Any
        builder: Any
        at: Any
        at_keyword: Any
        consume_as: Any
        identifier_text: Any
        token_text: Any
        recover: Any
        parse_package_definition: Any
        parse_import_definition: Any
        parse_option_definition: Any
        parse_component_id_definition: Any
        parse_field_definition: Any
        parse_type_name: Any
        parse_enum_contents: Any
        parse_data_definition: Any
        parse_event_definition: Any
        parse_command_definition: Any
        parse_annotation: Any

    def at_option_statement(self) -> bool:
        """
        Check whether the current ``option`` starts an option statement.

        ``option`` is also a legal type name. A peek at the next token decides:
        ``option<`` is a generic type, anything else is an option statement.
        The scan uses a checkpoint and always rolls back.
        """
        if not self.at_keyword(KEYWORD_OPTION):
            return False
        checkpoint = self.source.checkpoint()
        self.source.advance()
        is_option = self.source.current_type() != TokenType.LANGLE
        checkpoint.rollback_to()
        return is_option

    def parse_type_contents(self) -> None:
        """
        Parse statements inside a type block until one cannot start.

        Grammar:
            (option | annotation | enum_def | type_def | field)*
        """
        while True:
            if self.at_option_statement():
                self.parse_option_definition()
            elif self.at(TokenType.LBRACKET):
                self.parse_annotation()
            elif self.at_keyword(KEYWORD_ENUM):
                self.parse_enum_definition()
            elif self.at_keyword(KEYWORD_TYPE):
                self.parse_type_definition()
            elif self.at(TokenType.IDENTIFIER):
                self.parse_field_definition()
            else:
                return

    def parse_component_contents(self) -> None:
        """
        Parse statements inside a component block until one cannot start.

        Grammar:
            (option | annotation | id | data | event | command | field)*
        """
        while True:
            if self.at_option_statement():
                self.parse_option_definition()
            elif self.at(TokenType.LBRACKET):
                self.parse_annotation()
            elif self.at_keyword(KEYWORD_ID):
                self.parse_component_id_definition()
            elif self.at_keyword(KEYWORD_DATA):
                self.parse_data_definition()
            elif self.at_keyword(KEYWORD_EVENT):
                self.parse_event_definition()
            elif self.at_keyword(KEYWORD_COMMAND):
                self.parse_command_definition()
            elif self.at(TokenType.IDENTIFIER):
                self.parse_field_definition()
            else:
                return

    def _parse_block(self, keyword: str, kind: NodeKind, parse_contents: Any) -> None:
        """
        Grammar:
            keyword IDENTIFIER '{' contents '}'

        Enum, type and component blocks share this shape. Failures recover in
        BRACES context so the outer document resumes after the block's '}'.
        A type may be declared generic (``type Pair<A, B> { ... }``); its name
        is then parsed as a generic type name inside the DEFINITION_NAME.
        """
        marker = self.builder.open()
        self.consume_as(NodeKind.KEYWORD)
        if not self.at(TokenType.IDENTIFIER):
            self.recover(marker, kind, Construct.BRACES, f"Expected identifier after '{keyword}'.")
            return
        if keyword == KEYWORD_TYPE and self.source.look_ahead(1) == TokenType.LANGLE:
            name_marker = self.builder.open()
            name = self.parse_type_name(name_marker, NodeKind.DEFINITION_NAME, Construct.BRACES)
            if name is None:
                marker.close(kind)
                return
            name_marker.close(NodeKind.DEFINITION_NAME)
        else:
            name = self.identifier_text()
            self.consume_as(NodeKind.DEFINITION_NAME)
        if not self.at(TokenType.LBRACE):
            self.recover(marker, kind, Construct.BRACES, f"Expected '{{' after '{keyword} {name}'.")
            return
        self.consume_as(None)
        parse_contents()
        if not self.at(TokenType.RBRACE):
            self.recover(
                marker,
                kind,
                Construct.BRACES,
                f"Invalid '{self.token_text()}' inside {keyword} {name}.",
            )
            return
        self.consume_as(None)
        marker.close(kind)

    def parse_enum_definition(self) -> None:
        self._parse_block(KEYWORD_ENUM, NodeKind.ENUM_DEFINITION, self.parse_enum_contents)

    def parse_type_definition(self) -> None:
        self._parse_block(KEYWORD_TYPE, NodeKind.TYPE_DEFINITION, self.parse_type_contents)

    def parse_component_definition(self) -> None:
        self._parse_block(
            KEYWORD_COMPONENT, NodeKind.COMPONENT_DEFINITION, self.parse_component_contents
        )

    def parse_top_level_definition(self) -> None:
        """Dispatch one top-level definition by its leading token."""
        if self.at_keyword(KEYWORD_PACKAGE):
            self.parse_package_definition()
        elif self.at_keyword(KEYWORD_IMPORT):
            self.parse_import_definition()
        elif self.at_keyword(KEYWORD_ENUM):
            self.parse_enum_definition()
        elif self.at_keyword(KEYWORD_TYPE):
            self.parse_type_definition()
        elif self.at_keyword(KEYWORD_COMPONENT):
            self.parse_component_definition()
        elif self.at(TokenType.LBRACKET):
            self.parse_annotation()
        else:
            self.recover(None, None, Construct.TOP_LEVEL, TOP_LEVEL_MESSAGE)
