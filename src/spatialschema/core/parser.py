"""
Schema parser entry points.

Wraps the lexer and the mixin-based Parser into a small facade that hosts
(the CLI, editors, build tools) call with source text or file paths.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import ParserOptions
from .errors import ErrorContext, SchemaError, extract_snippet
from .lexer import tokenize
from .schema_parser_impl import parse_tokens
from .syntax import Diagnostic, SyntaxNode

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """
    Outcome of parsing one schema source.

    Attributes:
        tree: SCHEMA_FILE root node spanning the whole text
        diagnostics: One entry per error node, in source order
        text: The source text that was parsed
        file: Source file path, if the text came from a file
    """

    tree: SyntaxNode
    diagnostics: list[Diagnostic] = field(default_factory=list)
    text: str = ""
    file: Path | None = None

    @property
    def ok(self) -> bool:
        """True when the source parsed without a single error."""
        return not self.diagnostics

    def format_diagnostics(self, with_snippets: bool = False) -> str:
        """
        Render diagnostics one per line as ``file:line:col: error: message``.

        Args:
            with_snippets: Follow each line with the surrounding source and a
                caret under the error position

        Returns:
            Newline-joined report, empty if there are no diagnostics
        """
        name = str(self.file) if self.file else None
        lines: list[str] = []
        for diagnostic in self.diagnostics:
            lines.append(diagnostic.format(name))
            if with_snippets:
                context = ErrorContext(
                    file=self.file,
                    line=diagnostic.line,
                    column=diagnostic.column,
                    snippet=extract_snippet(self.text, diagnostic.line),
                )
                lines.append(context.format_snippet())
        return "\n".join(lines)


def parse_schema(
    text: str,
    file: Path | None = None,
    options: ParserOptions | None = None,
) -> ParseResult:
    """
    Parse schema source text.

    Never raises on malformed input; syntax errors are returned as
    diagnostics and as error nodes in the tree.

    Args:
        text: Schema source text
        file: Source file path (used in diagnostics only)
        options: Parser behaviour switches

    Returns:
        ParseResult for the text
    """
    tokens = tokenize(text, file)
    tree, diagnostics = parse_tokens(tokens, file, options)
    return ParseResult(tree=tree, diagnostics=diagnostics, text=text, file=file)


def parse_file(path: Path, options: ParserOptions | None = None) -> ParseResult:
    """
    Read and parse one schema file.

    Raises:
        SchemaError: If the file cannot be read or is not valid UTF-8
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaError(f"Cannot read schema file {path}: {e}") from e
    return parse_schema(text, path, options)


def parse_files(paths: list[Path], options: ParserOptions | None = None) -> list[ParseResult]:
    """
    Parse schema files one after another.

    Args:
        paths: Schema file paths
        options: Parser behaviour switches shared by every file

    Returns:
        One ParseResult per path, in the given order
    """
    results: list[ParseResult] = []
    for path in paths:
        result = parse_file(path, options)
        logger.info("Parsed %s: %d error(s)", path, len(result.diagnostics))
        results.append(result)
    return results
