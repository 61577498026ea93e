"""Version information for the Perms API.

Read from installed package metadata, falling back to pyproject.toml when
running from a source checkout that was never installed.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "perms-api"

# src/api/infrastructure/version.py -> repository root
_PYPROJECT = Path(__file__).resolve().parents[3] / "pyproject.toml"


def get_version() -> str:
    """Get the application version.

    Returns:
        Version string (e.g., "0.1.0")
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        with open(_PYPROJECT, "rb") as f:
            pyproject_data = tomllib.load(f)

        return pyproject_data["project"]["version"]


__version__ = get_version()
