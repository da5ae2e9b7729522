"""
Cursor over a lexed token stream.

The parser reads tokens only through a TokenSource: the current token's type
and text, one-token advance, k-token lookahead and a checkpoint that can be
rolled back for speculative scanning.
"""

from __future__ import annotations

from .lexer import Token, TokenType


class Checkpoint:
    """A saved cursor position on a TokenSource."""

    def __init__(self, source: TokenSource, pos: int):
        self._source = source
        self._pos = pos

    def rollback_to(self) -> None:
        """Restore the source cursor to where the checkpoint was taken."""
        self._source.pos = self._pos


class TokenSource:
    """
    Token cursor used by the parser.

    The token list must end with an EOF token (as produced by ``tokenize``).
    Advancing past EOF is a no-op, so loops that advance until a boundary
    always terminate at end of input.
    """

    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("Token stream must end with an EOF token")
        self.tokens = tokens
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token (the EOF token at end of input)."""
        return self.tokens[min(self.pos, len(self.tokens) - 1)]

    def current_type(self) -> TokenType:
        return self.current_token().type

    def current_text(self) -> str | None:
        """Text of the current token, or None at end of input."""
        token = self.current_token()
        if token.type == TokenType.EOF:
            return None
        return token.value

    def current_offset(self) -> int:
        return self.current_token().offset

    def eof(self) -> bool:
        return self.current_type() == TokenType.EOF

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def look_ahead(self, steps: int) -> TokenType:
        """Type of the token ``steps`` positions after the current one."""
        pos = self.pos + steps
        if pos >= len(self.tokens):
            return TokenType.EOF
        return self.tokens[pos].type

    def checkpoint(self) -> Checkpoint:
        """Save the cursor for a later ``rollback_to``."""
        return Checkpoint(self, self.pos)
