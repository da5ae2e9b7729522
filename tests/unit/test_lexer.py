"""Tests for the schema lexer."""

import pytest

from spatialschema.core.lexer import Token, TokenType, tokenize


def _types(text: str) -> list[TokenType]:
    return [t.type for t in tokenize(text)]


def _values(text: str) -> list[str]:
    return [t.value for t in tokenize(text) if t.type != TokenType.EOF]


class TestBasicTokens:
    def test_package_statement(self):
        assert _types("package a.b;") == [
            TokenType.IDENTIFIER,
            TokenType.IDENTIFIER,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ]
        assert _values("package a.b;") == ["package", "a.b", ";"]

    def test_all_punctuation(self):
        assert _types(";=,:.{}<>()[]")[:-1] == [
            TokenType.SEMICOLON,
            TokenType.EQUALS,
            TokenType.COMMA,
            TokenType.COLON,
            TokenType.DOT,
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.LANGLE,
            TokenType.RANGLE,
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.LBRACKET,
            TokenType.RBRACKET,
        ]

    def test_empty_input_is_just_eof(self):
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].offset == 0

    def test_eof_offset_is_text_length(self):
        text = "id = 1;   \n\n"
        assert tokenize(text)[-1].offset == len(text)


class TestLiterals:
    def test_negative_integer(self):
        tokens = tokenize("-5")
        assert tokens[0].type == TokenType.INTEGER
        assert tokens[0].value == "-5"

    def test_decimal_splits_into_three_tokens(self):
        assert _types("1.5")[:-1] == [TokenType.INTEGER, TokenType.DOT, TokenType.INTEGER]

    def test_string_keeps_quotes(self):
        tokens = tokenize('"a/b.schema"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == '"a/b.schema"'

    def test_unterminated_string_stops_at_end_of_line(self):
        tokens = tokenize('"abc\nx')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == '"abc'
        assert tokens[1].type == TokenType.IDENTIFIER
        assert tokens[1].value == "x"

    def test_dotted_identifier_is_one_token(self):
        assert _values("foo.bar()") == ["foo.bar", "(", ")"]

    def test_dot_before_digit_ends_identifier(self):
        assert _types("a.1")[:-1] == [TokenType.IDENTIFIER, TokenType.DOT, TokenType.INTEGER]


class TestCommentsAndErrors:
    def test_comments_are_skipped(self):
        assert _values("// c\nid /* b */ = 1;") == ["id", "=", "1", ";"]

    def test_unterminated_block_comment_swallows_rest(self):
        assert _types("id /* never closed ; }") == [TokenType.IDENTIFIER, TokenType.EOF]

    def test_unknown_character_is_bad_character(self):
        tokens = tokenize("a @ b")
        assert tokens[1].type == TokenType.BAD_CHARACTER
        assert tokens[1].value == "@"

    @pytest.mark.parametrize("text", ["@#$%", '"', "/*", "-", "\x00\x01", "é ü"])
    def test_never_raises(self, text: str):
        tokens = tokenize(text)
        assert tokens[-1].type == TokenType.EOF


class TestLocations:
    def test_line_column_and_offset(self):
        tokens = tokenize("type A {\n  int32 x = 1;\n}")
        x = next(t for t in tokens if t.value == "x")
        assert (x.line, x.column, x.offset) == (2, 9, 17)

    def test_token_end(self):
        token = Token(TokenType.IDENTIFIER, "abc", 1, 1, 10)
        assert token.end == 13
