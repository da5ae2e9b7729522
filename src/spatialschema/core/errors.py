"""
Error types for spatialschema.

Syntax errors in schema files are never raised: the parser records them as
error nodes and diagnostics. The exceptions here cover the host-facing
failures around parsing (unreadable files, bad configuration, misuse of the
tree builder).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class SchemaError(Exception):
    """Base exception for all spatialschema errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ConfigError(SchemaError):
    """
    Raised when a schema.toml (or [tool.spatialschema] table) is invalid.

    Examples:
    - Malformed TOML
    - A table or key with the wrong type
    """

    pass


class TreeBuilderError(SchemaError):
    """
    Raised when the tree builder is driven out of stack order.

    Examples:
    - Closing a marker that is not the innermost open marker
    - Closing or dropping a marker twice

    This signals a bug in a grammar production, never malformed input.
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional code snippet showing the error location
    """

    file: Path | None
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "player.schema:10:5"
        """
        location = f"{self.file or '<input>'}:{self.line}:{self.column}"

        if self.snippet:
            return f"{location}\n{self.format_snippet()}"
        return location

    def format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet shows up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def extract_snippet(text: str, line: int, before: int = 2, after: int = 2) -> str:
    """
    Cut the lines around ``line`` out of ``text`` for an ErrorContext.

    Args:
        text: Full source text
        line: Line number the snippet is centred on (1-indexed)
        before: Lines to include before ``line``
        after: Lines to include after ``line``

    Returns:
        The selected lines joined with newlines
    """
    lines = text.split("\n")
    start = max(1, line - before)
    end = min(len(lines), line + after)
    return "\n".join(lines[start - 1 : end])


def make_config_error(
    message: str,
    file: Path | None = None,
) -> ConfigError:
    """
    Helper to create a ConfigError with optional file context.

    Args:
        message: Error description
        file: Optional config file path

    Returns:
        ConfigError with context if a file is known
    """
    if file:
        return ConfigError(message, ErrorContext(file=file, line=1, column=1))
    return ConfigError(message)
