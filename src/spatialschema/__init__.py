"""
spatialschema - error-tolerant parser for SpatialOS-style schema files.

Parses schema source into a concrete syntax tree, recovering after every
syntax error so editors and build tools always get a complete tree plus a
list of diagnostics.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core.config import ParserOptions, SchemaConfig, load_config
from .core.errors import ConfigError, SchemaError, TreeBuilderError
from .core.parser import ParseResult, parse_file, parse_files, parse_schema
from .core.syntax import Diagnostic, NodeKind, SyntaxNode

__version__ = get_version()

__all__ = [
    "__version__",
    "parse_schema",
    "parse_file",
    "parse_files",
    "ParseResult",
    "ParserOptions",
    "SchemaConfig",
    "load_config",
    "Diagnostic",
    "NodeKind",
    "SyntaxNode",
    "SchemaError",
    "ConfigError",
    "TreeBuilderError",
]
