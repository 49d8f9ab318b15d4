"""
Version utilities for i18n-retrofit.

This module provides centralized version information, read from the installed
package metadata with a fallback to pyproject.toml for source checkouts.
"""

import logging
import tomllib
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "i18n-retrofit"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """
    Get the project version.

    Returns:
        Version string (e.g., "0.1.0")

    Raises:
        RuntimeError: If the version cannot be determined from any source
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        logger.debug("Package metadata not found, falling back to pyproject.toml")

    return _read_version_from_pyproject()


def _read_version_from_pyproject() -> str:
    """Read the version from the nearest pyproject.toml."""
    pyproject_path = Path("pyproject.toml")

    if not pyproject_path.exists():
        # Relative to this file for other working directories (src layout)
        pyproject_path = Path(__file__).parents[4] / "pyproject.toml"

    if not pyproject_path.exists():
        raise RuntimeError("pyproject.toml not found")

    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise RuntimeError(f"Failed to read version from {pyproject_path}: {e}") from e

    project_data: object = data.get("project")
    if not isinstance(project_data, dict):
        raise RuntimeError("project section not found in pyproject.toml")

    project_version: object = project_data.get("version")  # pyright: ignore[reportUnknownMemberType]
    if not isinstance(project_version, str):
        raise RuntimeError("version not found in pyproject.toml")

    return project_version


def get_version() -> str:
    """
    Get the project version, never raising.

    Returns:
        Version string, or "unknown" if it cannot be determined
    """
    try:
        return get_project_version()
    except RuntimeError as e:
        logger.warning(f"Could not determine project version: {e}")
        return "unknown"
