"""
Simple statement parser mixin for the schema language.

Parses the one-line statements that share the same shape: a keyword, a
fixed run of required tokens, and a terminating ';'.

Syntax:

    package improbable.demo;
    import "improbable/standard_library.schema";
    option java_package = demo;
    id = 1001;
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..lexer import TokenType
from ..syntax import NodeKind
from .base import KEYWORD_ID, KEYWORD_IMPORT, KEYWORD_OPTION, KEYWORD_PACKAGE, Construct


class StatementParserMixin:
    """Parser mixin for package, import, option and component id statements."""

    if TYPE_CHECKING:
        builder: Any
        at: Any
        consume_as: Any
        identifier_text: Any
        integer_value: Any
        string_value: Any
        recover: Any

    def parse_package_definition(self) -> None:
        """
        Grammar:
            'package' IDENTIFIER ';'
        """
        marker = self.builder.open()
        self.consume_as(NodeKind.KEYWORD)
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.PACKAGE_DEFINITION,
                Construct.STATEMENT,
                f"Expected a package name after '{KEYWORD_PACKAGE}'.",
            )
            return
        self.consume_as(NodeKind.PACKAGE_NAME)
        if not self.at(TokenType.SEMICOLON):
            self.recover(
                marker,
                NodeKind.PACKAGE_DEFINITION,
                Construct.STATEMENT,
                f"Expected ';' after {KEYWORD_PACKAGE} definition.",
            )
            return
        self.consume_as(None)
        marker.close(NodeKind.PACKAGE_DEFINITION)

    def parse_import_definition(self) -> None:
        """
        Grammar:
            'import' STRING ';'
        """
        marker = self.builder.open()
        self.consume_as(NodeKind.KEYWORD)
        if not self.at(TokenType.STRING):
            self.recover(
                marker,
                NodeKind.IMPORT_DEFINITION,
                Construct.STATEMENT,
                f"Expected a quoted filename after '{KEYWORD_IMPORT}'.",
            )
            return
        filename = self.string_value()
        self.consume_as(NodeKind.IMPORT_FILENAME)
        if not self.at(TokenType.SEMICOLON):
            self.recover(
                marker,
                NodeKind.IMPORT_DEFINITION,
                Construct.STATEMENT,
                f"Expected ';' after '{KEYWORD_IMPORT} \"{filename}\"'.",
            )
            return
        self.consume_as(None)
        marker.close(NodeKind.IMPORT_DEFINITION)

    def parse_option_definition(self) -> None:
        """
        Grammar:
            'option' IDENTIFIER '=' IDENTIFIER ';'
        """
        marker = self.builder.open()
        self.consume_as(NodeKind.KEYWORD)
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.OPTION_DEFINITION,
                Construct.STATEMENT,
                f"Expected identifier after '{KEYWORD_OPTION}'.",
            )
            return
        name = self.identifier_text()
        self.consume_as(NodeKind.OPTION_NAME)
        if not self.at(TokenType.EQUALS):
            self.recover(
                marker,
                NodeKind.OPTION_DEFINITION,
                Construct.STATEMENT,
                f"Expected '=' after '{KEYWORD_OPTION} {name}'.",
            )
            return
        self.consume_as(None)
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.OPTION_DEFINITION,
                Construct.STATEMENT,
                f"Expected option value after '{KEYWORD_OPTION} {name} = '.",
            )
            return
        value = self.identifier_text()
        self.consume_as(NodeKind.OPTION_VALUE)
        if not self.at(TokenType.SEMICOLON):
            self.recover(
                marker,
                NodeKind.OPTION_DEFINITION,
                Construct.STATEMENT,
                f"Expected ';' after '{KEYWORD_OPTION} {name} = {value}'.",
            )
            return
        self.consume_as(None)
        marker.close(NodeKind.OPTION_DEFINITION)

    def parse_component_id_definition(self) -> None:
        """
        Grammar:
            'id' '=' INTEGER ';'
        """
        marker = self.builder.open()
        self.consume_as(NodeKind.KEYWORD)
        if not self.at(TokenType.EQUALS):
            self.recover(
                marker,
                NodeKind.COMPONENT_ID_DEFINITION,
                Construct.STATEMENT,
                f"Expected '=' after '{KEYWORD_ID}'.",
            )
            return
        self.consume_as(None)
        if not self.at(TokenType.INTEGER):
            self.recover(
                marker,
                NodeKind.COMPONENT_ID_DEFINITION,
                Construct.STATEMENT,
                f"Expected integer ID value after '{KEYWORD_ID} = '.",
            )
            return
        value = self.integer_value()
        self.consume_as(NodeKind.FIELD_NUMBER)
        if not self.at(TokenType.SEMICOLON):
            self.recover(
                marker,
                NodeKind.COMPONENT_ID_DEFINITION,
                Construct.STATEMENT,
                f"Expected ';' after '{KEYWORD_ID} = {value}'.",
            )
            return
        self.consume_as(None)
        marker.close(NodeKind.COMPONENT_ID_DEFINITION)
