"""
Type and field parser mixin for the schema language.

Parses type references (including generics), field definitions and the
values inside an enum block.

Syntax:

    type Position {
      Coordinates coords = 1;
      map<EntityId, float> weights = 2;
    }

    enum Color {
      RED = 0;
      GREEN = 1;
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..lexer import TokenType
from ..syntax import NodeKind
from ..tree_builder import Marker
from .base import Construct


class TypeParserMixin:
    """Parser mixin for type names, fields and enum values."""

    if TYPE_CHECKING:
        builder: Any
        at: Any
        consume_as: Any
        identifier_text: Any
        integer_value: Any
        token_text: Any
        recover: Any
        parse_annotation: Any

    def parse_type_name(
        self,
        marker: Marker,
        failed_kind: NodeKind,
        construct: Construct = Construct.STATEMENT,
    ) -> str | None:
        """
        Parse a possibly generic type reference.

        Grammar:
            IDENTIFIER ('<' IDENTIFIER (',' IDENTIFIER)* '>')?

        The whole reference becomes one FIELD_TYPE node. The rendered text
        (``Outer<A, B>``) is returned for use in messages and kept out of the
        tree. On a malformed generic the FIELD_TYPE marker is dropped, the
        enclosing ``marker`` is closed as ``failed_kind`` and None is returned.

        Args:
            marker: Marker of the construct that owns this type reference
            failed_kind: Kind to close ``marker`` as when recovery runs
            construct: Recovery context for a malformed generic

        Returns:
            Rendered type text, or None after recovery
        """
        type_marker = self.builder.open()
        name = self.identifier_text()
        self.consume_as(NodeKind.TYPE_NAME)
        if not self.at(TokenType.LANGLE):
            type_marker.close(NodeKind.FIELD_TYPE)
            return name

        name += "<"
        self.consume_as(None)
        if not self.at(TokenType.IDENTIFIER):
            type_marker.drop()
            self.recover(marker, failed_kind, construct, f"Expected typename after '{name}'.")
            return None
        name += self.identifier_text()
        self.consume_as(NodeKind.TYPE_PARAMETER_NAME)

        while True:
            if self.at(TokenType.RANGLE):
                name += ">"
                self.consume_as(None)
                type_marker.close(NodeKind.FIELD_TYPE)
                return name
            if self.at(TokenType.COMMA):
                name += ", "
                self.consume_as(None)
                if not self.at(TokenType.IDENTIFIER):
                    type_marker.drop()
                    self.recover(marker, failed_kind, construct, "Expected typename after ','.")
                    return None
                name += self.identifier_text()
                self.consume_as(NodeKind.TYPE_PARAMETER_NAME)
                continue
            type_marker.drop()
            self.recover(
                marker, failed_kind, construct, f"Invalid '{self.token_text()}' inside <>."
            )
            return None

    def parse_field_definition(self) -> None:
        """
        Grammar:
            type_name IDENTIFIER '=' INTEGER ';'
        """
        marker = self.builder.open()
        type_name = self.parse_type_name(marker, NodeKind.FIELD_DEFINITION)
        if type_name is None:
            return
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.FIELD_DEFINITION,
                Construct.STATEMENT,
                f"Expected field name after '{type_name}'.",
            )
            return
        field_name = self.identifier_text()
        self.consume_as(NodeKind.FIELD_NAME)
        if not self.at(TokenType.EQUALS):
            self.recover(
                marker,
                NodeKind.FIELD_DEFINITION,
                Construct.STATEMENT,
                f"Expected '=' after '{type_name} {field_name}'.",
            )
            return
        self.consume_as(None)
        if not self.at(TokenType.INTEGER):
            self.recover(
                marker,
                NodeKind.FIELD_DEFINITION,
                Construct.STATEMENT,
                f"Expected field number after '{type_name} {field_name} = '.",
            )
            return
        field_number = self.integer_value()
        self.consume_as(NodeKind.FIELD_NUMBER)
        if not self.at(TokenType.SEMICOLON):
            self.recover(
                marker,
                NodeKind.FIELD_DEFINITION,
                Construct.STATEMENT,
                f"Expected ';' after '{type_name} {field_name} = {field_number}'.",
            )
            return
        self.consume_as(None)
        marker.close(NodeKind.FIELD_DEFINITION)

    def parse_enum_contents(self) -> None:
        """
        Parse enum values until a token that cannot start one.

        Grammar:
            (annotation | IDENTIFIER '=' INTEGER ';')*

        A malformed value recovers on its own; the loop then carries on with
        the next value.
        """
        while True:
            if self.at(TokenType.LBRACKET):
                self.parse_annotation()
                continue
            if not self.at(TokenType.IDENTIFIER):
                return

            marker = self.builder.open()
            name = self.identifier_text()
            self.consume_as(NodeKind.FIELD_NAME)
            if not self.at(TokenType.EQUALS):
                self.recover(
                    marker,
                    NodeKind.ENUM_VALUE_DEFINITION,
                    Construct.STATEMENT,
                    f"Expected '=' after '{name}'.",
                )
                continue
            self.consume_as(None)
            if not self.at(TokenType.INTEGER):
                self.recover(
                    marker,
                    NodeKind.ENUM_VALUE_DEFINITION,
                    Construct.STATEMENT,
                    f"Expected integer enum value after '{name} = '.",
                )
                continue
            value = self.integer_value()
            self.consume_as(NodeKind.FIELD_NUMBER)
            if not self.at(TokenType.SEMICOLON):
                self.recover(
                    marker,
                    NodeKind.ENUM_VALUE_DEFINITION,
                    Construct.STATEMENT,
                    f"Expected ';' after '{name} = {value}'.",
                )
                continue
            self.consume_as(None)
            marker.close(NodeKind.ENUM_VALUE_DEFINITION)
