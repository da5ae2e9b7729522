"""Core spatialschema functionality: lexer, parser, syntax tree, highlighting, configuration."""

from .config import ParserOptions, SchemaConfig, find_config, load_config
from .errors import ConfigError, ErrorContext, SchemaError, TreeBuilderError
from .fileset import discover_schema_files
from .highlight import HighlightRange, highlight_ranges
from .lexer import Token, TokenType, tokenize
from .parser import ParseResult, parse_file, parse_files, parse_schema
from .syntax import Diagnostic, HighlightCategory, HighlightTag, NodeKind, SyntaxNode

__all__ = [
    "ParserOptions",
    "SchemaConfig",
    "find_config",
    "load_config",
    "SchemaError",
    "ConfigError",
    "TreeBuilderError",
    "ErrorContext",
    "discover_schema_files",
    "HighlightRange",
    "highlight_ranges",
    "Token",
    "TokenType",
    "tokenize",
    "ParseResult",
    "parse_file",
    "parse_files",
    "parse_schema",
    "Diagnostic",
    "HighlightCategory",
    "HighlightTag",
    "NodeKind",
    "SyntaxNode",
]
