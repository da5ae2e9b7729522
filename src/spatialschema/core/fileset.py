import logging
from pathlib import Path

from .config import SchemaConfig

logger = logging.getLogger(__name__)


def discover_schema_files(config: SchemaConfig) -> list[Path]:
    files: list[Path] = []
    for base in config.schema_roots():
        if not base.exists():
            logger.warning("Schema path does not exist: %s", base)
            continue
        for p in base.rglob(f"*{config.extension}"):
            files.append(p)
    logger.debug("Discovered %d schema files", len(files))
    return sorted(set(files))
