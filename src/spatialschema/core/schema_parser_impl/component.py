"""
Component member parser mixin for the schema language.

Parses the statements only valid inside a component block.

Syntax:

    component Health {
      id = 1002;
      data HealthData;
      event Damage damaged;
      command HealResponse heal(HealRequest);
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..lexer import TokenType
from ..syntax import NodeKind
from .base import KEYWORD_COMMAND, KEYWORD_DATA, KEYWORD_EVENT, Construct


class ComponentParserMixin:
    """Parser mixin for data, event and command declarations."""

    if TYPE_CHECKING:
        builder: Any
        at: Any
        consume_as: Any
        identifier_text: Any
        recover: Any
        parse_type_name: Any

    def parse_data_definition(self) -> None:
        """
        Grammar:
            'data' type_name ';'
        """
        marker = self.builder.open()
        self.consume_as(NodeKind.KEYWORD)
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.DATA_DEFINITION,
                Construct.STATEMENT,
                f"Expected typename after '{KEYWORD_DATA}'.",
            )
            return
        type_name = self.parse_type_name(marker, NodeKind.DATA_DEFINITION)
        if type_name is None:
            return
        if not self.at(TokenType.SEMICOLON):
            self.recover(
                marker,
                NodeKind.DATA_DEFINITION,
                Construct.STATEMENT,
                f"Expected ';' after '{KEYWORD_DATA} {type_name}'.",
            )
            return
        self.consume_as(None)
        marker.close(NodeKind.DATA_DEFINITION)

    def parse_event_definition(self) -> None:
        """
        Grammar:
            'event' type_name IDENTIFIER ';'
        """
        marker = self.builder.open()
        self.consume_as(NodeKind.KEYWORD)
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.EVENT_DEFINITION,
                Construct.STATEMENT,
                f"Expected typename after '{KEYWORD_EVENT}'.",
            )
            return
        type_name = self.parse_type_name(marker, NodeKind.EVENT_DEFINITION)
        if type_name is None:
            return
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.EVENT_DEFINITION,
                Construct.STATEMENT,
                f"Expected field name after '{KEYWORD_EVENT} {type_name}'.",
            )
            return
        field_name = self.identifier_text()
        self.consume_as(NodeKind.FIELD_NAME)
        if not self.at(TokenType.SEMICOLON):
            self.recover(
                marker,
                NodeKind.EVENT_DEFINITION,
                Construct.STATEMENT,
                f"Expected ';' after '{KEYWORD_EVENT} {type_name} {field_name}'.",
            )
            return
        self.consume_as(None)
        marker.close(NodeKind.EVENT_DEFINITION)

    def parse_command_definition(self) -> None:
        """
        Grammar:
            'command' IDENTIFIER IDENTIFIER '(' IDENTIFIER ')' ';'

        Response type, command name, request type. Once the name has been
        read, a failure closes the partial node as a FIELD_DEFINITION.
        """
        marker = self.builder.open()
        self.consume_as(NodeKind.KEYWORD)
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.COMMAND_DEFINITION,
                Construct.STATEMENT,
                f"Expected command response after '{KEYWORD_COMMAND}'.",
            )
            return
        response = self.identifier_text()
        self.consume_as(NodeKind.TYPE_NAME)
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.COMMAND_DEFINITION,
                Construct.STATEMENT,
                f"Expected command name after '{KEYWORD_COMMAND} {response}'.",
            )
            return
        name = self.identifier_text()
        self.consume_as(NodeKind.COMMAND_NAME)
        signature = f"{KEYWORD_COMMAND} {response} {name}"
        if not self.at(TokenType.LPAREN):
            self.recover(
                marker,
                NodeKind.FIELD_DEFINITION,
                Construct.STATEMENT,
                f"Expected '(' after '{signature}'.",
            )
            return
        self.consume_as(None)
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.FIELD_DEFINITION,
                Construct.STATEMENT,
                f"Expected command request after '{signature}('.",
            )
            return
        request = self.identifier_text()
        self.consume_as(NodeKind.TYPE_NAME)
        if not self.at(TokenType.RPAREN):
            self.recover(
                marker,
                NodeKind.FIELD_DEFINITION,
                Construct.STATEMENT,
                f"Expected ')' after '{signature}({request}'.",
            )
            return
        self.consume_as(None)
        if not self.at(TokenType.SEMICOLON):
            self.recover(
                marker,
                NodeKind.FIELD_DEFINITION,
                Construct.STATEMENT,
                f"Expected ';' after '{signature}({request})'.",
            )
            return
        self.consume_as(None)
        marker.close(NodeKind.COMMAND_DEFINITION)
