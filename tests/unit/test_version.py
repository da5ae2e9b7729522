"""Tests for version lookup."""

from pathlib import Path

import spatialschema
from spatialschema._version import _checkout_version


def test_checkout_version_reads_project_table(tmp_path: Path):
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "spatialschema"\nversion = "9.8.7"\n')
    assert _checkout_version(pyproject) == "9.8.7"


def test_other_projects_are_ignored(tmp_path: Path):
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "something-else"\nversion = "1.0"\n')
    assert _checkout_version(pyproject) is None


def test_unreadable_pyproject(tmp_path: Path):
    assert _checkout_version(tmp_path / "missing.toml") is None
    broken = tmp_path / "pyproject.toml"
    broken.write_text("[project\n")
    assert _checkout_version(broken) is None


def test_package_version_is_set():
    assert spatialschema.__version__ != ""
