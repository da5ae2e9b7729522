"""
Concrete syntax tree model for schema files.

Nodes are immutable pydantic models produced by the TreeBuilder. Every node
carries exactly one NodeKind; consumed tokens appear as TOKEN leaves so the
tree covers the source text without gaps other than whitespace and comments.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .lexer import TokenType


class NodeKind(StrEnum):
    """Kinds of syntax tree nodes. Values are the display names."""

    SCHEMA_FILE = "Schema File"
    TOKEN = "Token"
    ERROR = "Error"

    KEYWORD = "Keyword"
    DEFINITION_NAME = "Definition Name"

    PACKAGE_DEFINITION = "Package Definition"
    PACKAGE_NAME = "Package Name"

    IMPORT_DEFINITION = "Import Definition"
    IMPORT_FILENAME = "Import Filename"

    OPTION_DEFINITION = "Option Definition"
    OPTION_NAME = "Option Name"
    OPTION_VALUE = "Option Value"

    TYPE_NAME = "Type Name"
    TYPE_PARAMETER_NAME = "Type Parameter Name"

    FIELD_TYPE = "Field Type"
    FIELD_NAME = "Field Name"
    FIELD_NUMBER = "Field Number"

    ENUM_DEFINITION = "Enum Definition"
    ENUM_VALUE_DEFINITION = "Enum Value Definition"

    DATA_DEFINITION = "Data Definition"
    FIELD_DEFINITION = "Field Definition"
    EVENT_DEFINITION = "Event Definition"

    TYPE_DEFINITION = "Type Definition"
    COMPONENT_DEFINITION = "Component Definition"
    COMPONENT_ID_DEFINITION = "Component ID Definition"

    COMMAND_DEFINITION = "Command Definition"
    COMMAND_NAME = "Command Name"

    ANNOTATION = "Annotation Definition"
    ANNOTATION_FIELD = "Annotation Field"
    ANNOTATION_FIELD_ARRAY = "Annotation Field Array"
    METHOD_INITIALIZING = "Method Initializing"
    ENUM_REFERENCE = "Enum Reference"


class HighlightCategory(StrEnum):
    """Display categories a host may map to colours."""

    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    TYPE = "type"
    NUMBER = "number"
    STRING = "string"
    METADATA = "metadata"
    ERROR = "error"


class HighlightTag(BaseModel):
    """
    A highlighted sub-range of one node's own text.

    Offsets are relative to the start of the owning node.
    """

    start: int
    end: int
    category: HighlightCategory

    model_config = ConfigDict(frozen=True)


class SyntaxNode(BaseModel):
    """
    One node of the concrete syntax tree.

    Attributes:
        kind: Node kind
        start: Offset of the first character covered (inclusive)
        end: Offset one past the last character covered
        children: Child nodes in source order
        token_type: Token type, set on TOKEN leaves only
        text: Raw token text, set on TOKEN leaves only
        message: Diagnostic message, set on ERROR nodes only
        tags: Highlight sub-ranges over this node's text
    """

    kind: NodeKind
    start: int
    end: int
    children: list[SyntaxNode] = Field(default_factory=list)
    token_type: TokenType | None = None
    text: str | None = None
    message: str | None = None
    tags: list[HighlightTag] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_error(self) -> bool:
        return self.kind == NodeKind.ERROR

    @property
    def is_token(self) -> bool:
        return self.kind == NodeKind.TOKEN

    def walk(self) -> Iterator[SyntaxNode]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, kind: NodeKind) -> list[SyntaxNode]:
        """All descendants (including self) of the given kind, in source order."""
        return [node for node in self.walk() if node.kind == kind]

    def first(self, kind: NodeKind) -> SyntaxNode | None:
        """First descendant (including self) of the given kind."""
        return next((node for node in self.walk() if node.kind == kind), None)

    def errors(self) -> list[SyntaxNode]:
        return self.find_all(NodeKind.ERROR)

    def child_kinds(self) -> list[NodeKind]:
        """Kinds of the direct children that are not bare tokens."""
        return [child.kind for child in self.children if not child.is_token]

    def token_text(self) -> str:
        """Concatenated text of every token under this node, space separated."""
        return " ".join(node.text or "" for node in self.walk() if node.is_token)

    def text_of(self, source: str) -> str:
        """Slice of ``source`` covered by this node."""
        return source[self.start : self.end]


class Diagnostic(BaseModel):
    """
    A syntax error reported while parsing.

    There is a single severity: every malformed construct is an error.
    """

    message: str
    start: int
    end: int
    line: int
    column: int
    severity: str = "error"

    model_config = ConfigDict(frozen=True)

    def format(self, file: str | None = None) -> str:
        """Format as ``file:line:col: error: message``."""
        return f"{file or '<input>'}:{self.line}:{self.column}: {self.severity}: {self.message}"
