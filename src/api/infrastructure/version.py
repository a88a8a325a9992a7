"""Version of the dashboard shell, as reported by the app and /docs."""

import tomllib
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "dashboard-shell"
UNKNOWN_VERSION = "0.0.0+unknown"


def _version_from_pyproject(pyproject_path: Path) -> str:
    try:
        with pyproject_path.open("rb") as f:
            return tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return UNKNOWN_VERSION


@lru_cache
def get_version() -> str:
    """Installed distribution version, else the checkout's pyproject.toml."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        # <repo>/src/api/infrastructure/version.py
        return _version_from_pyproject(Path(__file__).parents[3] / "pyproject.toml")


__version__ = get_version()
