"""
Lexer/Tokenizer for the schema language.

Converts raw schema text into a stream of tokens with source location
tracking. The lexer is tolerant: it never raises on malformed input.
Unknown characters become BAD_CHARACTER tokens and an unterminated string
runs to the end of its line, so the parser can report and recover.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class TokenType(Enum):
    """Token types in the schema language."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    INTEGER = "INTEGER"
    STRING = "STRING"

    # Punctuation
    SEMICOLON = ";"
    EQUALS = "="
    COMMA = ","
    COLON = ":"
    DOT = "."
    LBRACE = "{"
    RBRACE = "}"
    LANGLE = "<"
    RANGLE = ">"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"

    # Special
    BAD_CHARACTER = "BAD_CHARACTER"
    EOF = "EOF"


# Single-character punctuation lookup
PUNCTUATION: dict[str, TokenType] = {
    ";": TokenType.SEMICOLON,
    "=": TokenType.EQUALS,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    ".": TokenType.DOT,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}


@dataclass(frozen=True)
class Token:
    """
    A single token in a schema file.

    Attributes:
        type: Type of token
        value: Raw source text of the token (strings keep their quotes)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Character offset of the first character (0-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int
    offset: int

    @property
    def end(self) -> int:
        """Offset one past the last character of the token."""
        return self.offset + len(self.value)

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for the schema language.

    Converts source text into a list of tokens, skipping whitespace and
    comments. The list always ends with a single EOF token.
    """

    def __init__(self, text: str, file: Path | None = None):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (kept for callers that report locations)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace_and_comments(self) -> None:
        """Skip whitespace, // line comments and /* block */ comments."""
        while True:
            ch = self.current_char()
            if ch is not None and ch.isspace():
                self.advance()
            elif ch == "/" and self.peek_char() == "/":
                while self.current_char() not in (None, "\n"):
                    self.advance()
            elif ch == "/" and self.peek_char() == "*":
                self.advance()
                self.advance()
                # An unterminated block comment swallows the rest of the file
                while self.current_char() is not None:
                    if self.current_char() == "*" and self.peek_char() == "/":
                        self.advance()
                        self.advance()
                        break
                    self.advance()
            else:
                return

    def read_string(self) -> None:
        """Read a double-quoted string; unterminated strings stop at end of line."""
        self.advance()  # opening quote
        while self.current_char() not in (None, "\n", '"'):
            self.advance()
        if self.current_char() == '"':
            self.advance()

    def read_number(self) -> None:
        """Read an optionally negative run of digits."""
        if self.current_char() == "-":
            self.advance()
        while (ch := self.current_char()) is not None and ch.isdigit():
            self.advance()

    def read_identifier(self) -> None:
        """Read an identifier, including dotted segments such as ``a.b.c``."""
        while True:
            while (ch := self.current_char()) is not None and (ch.isalnum() or ch == "_"):
                self.advance()
            nxt = self.peek_char()
            if self.current_char() == "." and nxt is not None and (nxt.isalpha() or nxt == "_"):
                self.advance()
                continue
            return

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF
        """
        while True:
            self.skip_whitespace_and_comments()
            ch = self.current_char()
            if ch is None:
                break

            start = self.pos
            token_line = self.line
            token_col = self.column

            if ch == '"':
                self.read_string()
                token_type = TokenType.STRING

            elif ch.isdigit() or (ch == "-" and (self.peek_char() or "").isdigit()):
                self.read_number()
                token_type = TokenType.INTEGER

            elif ch.isalpha() or ch == "_":
                self.read_identifier()
                token_type = TokenType.IDENTIFIER

            elif ch in PUNCTUATION:
                self.advance()
                token_type = PUNCTUATION[ch]

            else:
                self.advance()
                token_type = TokenType.BAD_CHARACTER

            self.tokens.append(
                Token(token_type, self.text[start : self.pos], token_line, token_col, start)
            )

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column, self.pos))
        return self.tokens


def tokenize(text: str, file: Path | None = None) -> list[Token]:
    """
    Convenience function to tokenize schema text.

    Args:
        text: Source text
        file: Source file path

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
