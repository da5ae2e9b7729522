"""
Project configuration for spatialschema.

Read from a ``schema.toml`` file, or from the ``[tool.spatialschema]`` table
of a ``pyproject.toml``:

    [project]
    name = "my_game"

    [schema]
    paths = ["schema"]
    extension = ".schema"

    [parser]
    legacy_quote_stripping = false
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import make_config_error

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "schema.toml"
PYPROJECT_FILENAME = "pyproject.toml"


@dataclass
class ParserOptions:
    """Parser behaviour switches ([parser] table)."""

    # Strip one extra trailing character from import filenames in messages,
    # as older tooling did
    legacy_quote_stripping: bool = False


@dataclass
class SchemaConfig:
    """Resolved project configuration."""

    project_root: Path
    name: str = ""
    schema_paths: list[str] = field(default_factory=lambda: ["."])
    extension: str = ".schema"
    parser: ParserOptions = field(default_factory=ParserOptions)

    def schema_roots(self) -> list[Path]:
        """Absolute directories searched for schema files."""
        return [(self.project_root / rel).resolve() for rel in self.schema_paths]


def _table(data: dict[str, Any], key: str, path: Path) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise make_config_error(f"[{key}] must be a table", path)
    return value


def _typed(table: dict[str, Any], key: str, expected: type, default: Any, path: Path) -> Any:
    value = table.get(key, default)
    if not isinstance(value, expected):
        raise make_config_error(
            f"'{key}' must be of type {expected.__name__}, got {type(value).__name__}", path
        )
    return value


def config_from_dict(data: dict[str, Any], path: Path) -> SchemaConfig:
    """
    Build a SchemaConfig from already-parsed TOML data.

    Args:
        data: TOML data (the [tool.spatialschema] table for pyproject files)
        path: File the data came from; its directory is the project root

    Returns:
        SchemaConfig with defaults filled in

    Raises:
        ConfigError: If a table or key has the wrong type
    """
    project = _table(data, "project", path)
    schema = _table(data, "schema", path)
    parser = _table(data, "parser", path)

    paths = _typed(schema, "paths", list, ["."], path)
    if not all(isinstance(p, str) for p in paths):
        raise make_config_error("'paths' must be a list of strings", path)

    extension = _typed(schema, "extension", str, ".schema", path)
    if not extension.startswith("."):
        extension = "." + extension

    return SchemaConfig(
        project_root=path.parent.resolve(),
        name=_typed(project, "name", str, "", path),
        schema_paths=paths,
        extension=extension,
        parser=ParserOptions(
            legacy_quote_stripping=_typed(parser, "legacy_quote_stripping", bool, False, path),
        ),
    )


def load_config(path: Path) -> SchemaConfig:
    """
    Load configuration from ``schema.toml`` or ``pyproject.toml``.

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise make_config_error(f"Cannot read config: {e}", path) from e
    except tomllib.TOMLDecodeError as e:
        raise make_config_error(f"Invalid TOML: {e}", path) from e

    if path.name == PYPROJECT_FILENAME:
        data = data.get("tool", {}).get("spatialschema", {})

    config = config_from_dict(data, path)
    logger.debug("Loaded config from %s (roots: %s)", path, config.schema_paths)
    return config


def find_config(start: Path) -> Path | None:
    """
    Find the nearest config file at or above ``start``.

    A ``schema.toml`` wins over a ``pyproject.toml`` in the same directory;
    a ``pyproject.toml`` only counts if it has a [tool.spatialschema] table.
    """
    start = start.resolve()
    for directory in [start, *start.parents]:
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return "spatialschema" in data.get("tool", {})
