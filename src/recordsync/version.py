"""
Version management for recordsync.
"""

from importlib.metadata import PackageNotFoundError, version

# Base version - keep in sync with pyproject.toml
BASE_VERSION = "0.1.0"


def get_version() -> str:
    """
    Get the current version.
    
    - Use the installed distribution metadata when available
    - Fallback to base version (e.g. running from a source checkout)
    """
    try:
        return version("recordsync")
    except PackageNotFoundError:
        return BASE_VERSION


# Export the version
__version__ = get_version()
