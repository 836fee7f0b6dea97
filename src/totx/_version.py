"""Package version lookup."""

import tomllib
from importlib import metadata
from pathlib import Path

DISTRIBUTION = "totx"

# src/totx/_version.py -> repository root
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_tree_version() -> str | None:
    if not _PYPROJECT.is_file():
        return None
    project = tomllib.loads(_PYPROJECT.read_text(encoding="utf-8")).get("project", {})
    if project.get("name") != DISTRIBUTION:
        return None
    return project.get("version")


def get_version() -> str:
    """
    Version of the running totx.

    A source checkout reports the version in its pyproject.toml, so an
    editable install never shows stale metadata. Otherwise the installed
    distribution's metadata is used.
    """
    version = _source_tree_version()
    if version is not None:
        return version
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"
