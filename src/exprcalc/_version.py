"""Installed version of exprcalc."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version


def get_version() -> str:
    """Version from the installed distribution, or 0.0.0 when running from a checkout."""
    try:
        return _metadata_version("exprcalc")
    except PackageNotFoundError:
        return "0.0.0"
