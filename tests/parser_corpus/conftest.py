"""Pytest configuration for parser corpus tests."""

from pathlib import Path

import pytest

# Corpus directories
CORPORA_DIR = Path(__file__).parent.parent / "corpora"
SCHEMA_CORPUS_DIR = CORPORA_DIR / "schema"


@pytest.fixture
def schema_corpus_dir() -> Path:
    """Return path to schema corpus directory."""
    return SCHEMA_CORPUS_DIR
