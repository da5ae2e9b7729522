"""
Annotation parser mixin for the schema language.

Parses bracketed annotations and the small value grammar of their fields.

Syntax:

    [Range(min = 0, max = 100)]
    [Tags(["a", "b"], {1: 2.5}, Color.RED, Vector3(1, 2, 3))]
    [Deprecated]

Field values are scalars (integers, decimals, booleans, strings, ``_``),
arrays, maps, constructor calls (``Name(...)``) and enum references
(``Enum.VALUE``).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ..highlight import dotted_segment_tags, enum_reference_tags
from ..lexer import TokenType
from ..syntax import NodeKind
from ..tree_builder import Marker
from .base import KEYWORD_ANNOTATION_START, Construct

SCALAR_PATTERN = re.compile(r'(?i)(?:-?\d+\.?\d*|true|false|"[^"]*"?|_)')


class AnnotationParserMixin:
    """
    Parser mixin for annotations and annotation field values.

    Every value production returns True on success. On failure it has
    already reported exactly one error, so callers close their own markers
    and return False without reporting again.
    """

    if TYPE_CHECKING:
        source: Any
        builder: Any
        at: Any
        consume_as: Any
        identifier_text: Any
        token_text: Any
        recover: Any

    def parse_annotation(self) -> None:
        """
        Grammar:
            '[' reference ( '(' named_fields | field_array )? ']'

        Named fields are used when the token two past '(' is '='.
        """
        marker = self.builder.open()
        self.consume_as(None)
        if not self.at(TokenType.IDENTIFIER):
            self.recover(
                marker,
                NodeKind.ANNOTATION,
                Construct.STATEMENT,
                f"Expected type after '{KEYWORD_ANNOTATION_START}'.",
            )
            return

        type_marker = self.builder.open()
        self._consume_reference(None)
        type_marker.close(NodeKind.TYPE_NAME)

        if self.at(TokenType.LPAREN):
            if self.source.look_ahead(2) == TokenType.EQUALS:
                ok = self._parse_named_fields(marker)
            else:
                ok = self.parse_annotation_field_array()
            if not ok:
                _close_partial(marker, NodeKind.ANNOTATION)
                return

        if not self.at(TokenType.RBRACKET):
            self.recover(
                marker, NodeKind.ANNOTATION, Construct.STATEMENT, "Expected end of annotation ']'"
            )
            return
        self.consume_as(None)
        marker.close(NodeKind.ANNOTATION)

    def _parse_named_fields(self, marker: Marker) -> bool:
        """
        Grammar:
            '(' IDENTIFIER '=' field (',' IDENTIFIER '=' field)* ')'
        """
        self.consume_as(None)
        while True:
            if not self.at(TokenType.IDENTIFIER):
                self.recover(
                    marker, NodeKind.ANNOTATION, Construct.STATEMENT, "Expected field identifier"
                )
                return False
            self.consume_as(NodeKind.FIELD_NAME)
            if not self.at(TokenType.EQUALS):
                self.recover(marker, NodeKind.ANNOTATION, Construct.STATEMENT, "Expected '='")
                return False
            self.consume_as(None)
            if not self.parse_annotation_field():
                return False

            if self.at(TokenType.RPAREN):
                self.consume_as(None)
                return True
            if not self.at(TokenType.COMMA):
                self.recover(
                    marker,
                    NodeKind.ANNOTATION,
                    Construct.STATEMENT,
                    "Expected ',' or end of annotation",
                )
                return False
            self.consume_as(None)

    def parse_annotation_field_array(self) -> bool:
        """
        Grammar:
            '(' ( field (',' field)* )? ')'
        """
        marker = self.builder.open()
        self.consume_as(None)
        if self.at(TokenType.RPAREN):
            self.consume_as(None)
            marker.close(NodeKind.ANNOTATION_FIELD_ARRAY)
            return True
        while True:
            if not self.parse_annotation_field():
                marker.close(NodeKind.ANNOTATION_FIELD_ARRAY)
                return False
            if self.at(TokenType.RPAREN):
                self.consume_as(None)
                marker.close(NodeKind.ANNOTATION_FIELD_ARRAY)
                return True
            if not self.at(TokenType.COMMA):
                self.recover(
                    marker,
                    NodeKind.ANNOTATION_FIELD_ARRAY,
                    Construct.STATEMENT,
                    "Expected ',' or end of array",
                )
                return False
            self.consume_as(None)

    def parse_annotation_field(self) -> bool:
        """
        Parse one annotation field value.

        Grammar:
            scalar ('.' INTEGER)?
            | '[' ( field (',' field)* )? ']'
            | '{' ( field ':' field (',' field ':' field)* )? '}'
            | IDENTIFIER field_array
            | IDENTIFIER
        """
        marker = self.builder.open()
        text = self.source.current_text()

        if text is not None and SCALAR_PATTERN.fullmatch(text):
            is_number = self.at(TokenType.INTEGER)
            self.consume_as(NodeKind.OPTION_VALUE)
            if is_number and self.at(TokenType.DOT):
                self.consume_as(NodeKind.OPTION_VALUE)
                if not self.at(TokenType.INTEGER):
                    self.recover(
                        marker,
                        NodeKind.ANNOTATION_FIELD,
                        Construct.STATEMENT,
                        "Cannot have a decimal with no decimal point",
                    )
                    return False
                self.consume_as(NodeKind.OPTION_VALUE)
            ok = True
        elif self.at(TokenType.LBRACKET):
            ok = self._parse_array_value(marker)
        elif self.at(TokenType.LBRACE):
            ok = self._parse_map_value(marker)
        elif self.at(TokenType.IDENTIFIER):
            is_call = self._consume_reference(NodeKind.TYPE_NAME)
            ok = self.parse_annotation_field_array() if is_call else True
        else:
            self.recover(
                marker,
                NodeKind.ANNOTATION_FIELD,
                Construct.STATEMENT,
                f"Expected annotation value, got '{self.token_text()}'.",
            )
            return False

        _close_partial(marker, NodeKind.ANNOTATION_FIELD)
        return ok

    def _parse_array_value(self, marker: Marker) -> bool:
        """
        Grammar:
            '[' ( field (',' field)* )? ']'
        """
        self.consume_as(None)
        if self.at(TokenType.RBRACKET):
            self.consume_as(None)
            return True
        while True:
            if not self.parse_annotation_field():
                return False
            if self.at(TokenType.RBRACKET):
                self.consume_as(None)
                return True
            if not self.at(TokenType.COMMA):
                self.recover(
                    marker,
                    NodeKind.ANNOTATION_FIELD,
                    Construct.STATEMENT,
                    "Expected ',' or end of array",
                )
                return False
            self.consume_as(None)

    def _parse_map_value(self, marker: Marker) -> bool:
        """
        Grammar:
            '{' ( field ':' field (',' field ':' field)* )? '}'
        """
        self.consume_as(None)
        if self.at(TokenType.RBRACE):
            self.consume_as(None)
            return True
        while True:
            if not self.parse_annotation_field():
                return False
            if not self.at(TokenType.COLON):
                self.recover(
                    marker, NodeKind.ANNOTATION_FIELD, Construct.STATEMENT, "Expected ':' in map"
                )
                return False
            self.consume_as(NodeKind.TYPE_NAME)
            if not self.parse_annotation_field():
                return False

            if self.at(TokenType.RBRACE):
                self.consume_as(None)
                return True
            if not self.at(TokenType.COMMA):
                self.recover(
                    marker,
                    NodeKind.ANNOTATION_FIELD,
                    Construct.STATEMENT,
                    "Expected ',' or end of map",
                )
                return False
            self.consume_as(None)

    def _consume_reference(self, fallback: NodeKind | None) -> bool:
        """
        Consume an identifier that names a constructor, an enum value or a type.

        - followed by '(': a constructor call, each dotted segment tagged
        - containing '.': an enum reference, enum part and value part tagged
        - otherwise: consumed as ``fallback`` (a bare token if None)

        Returns:
            True if the identifier starts a constructor call
        """
        text = self.identifier_text()
        if self.source.look_ahead(1) == TokenType.LPAREN:
            self.consume_as(NodeKind.METHOD_INITIALIZING, dotted_segment_tags(text))
            return True
        dot = text.find(".")
        if dot != -1:
            self.consume_as(NodeKind.ENUM_REFERENCE, enum_reference_tags(text, dot))
        else:
            self.consume_as(fallback)
        return False


def _close_partial(marker: Marker, kind: NodeKind) -> None:
    """Close ``marker`` as ``kind`` unless recovery already closed it."""
    if not marker.done:
        marker.close(kind)
