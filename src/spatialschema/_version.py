"""Version lookup for spatialschema."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DIST_NAME = "spatialschema"

# src/spatialschema/_version.py -> repository root
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _checkout_version(pyproject: Path = _PYPROJECT) -> str | None:
    """``[project] version`` from the checkout's pyproject.toml, if this is one."""
    try:
        with pyproject.open("rb") as f:
            project = tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return None
    if project.get("name") != DIST_NAME:
        return None
    return project.get("version")


def get_version() -> str:
    """Checkout version when running from source, else the installed distribution's."""
    checkout = _checkout_version()
    if checkout:
        return checkout
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0"
