# ==============================================================================
# Version Utilities
# ==============================================================================
"""
Utilities for retrieving package versions.
"""

from importlib.metadata import PackageNotFoundError, version


def get_shoptrack_version() -> str:
    """
    Get the shoptrack package version.

    Returns:
        Version string (e.g., "0.1.0")
    """
    try:
        return version("shoptrack")
    except PackageNotFoundError:
        return "0.1.0"
