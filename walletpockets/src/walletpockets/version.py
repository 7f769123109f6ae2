"""
Version information for walletpockets.
"""

from __future__ import annotations

# Format: MAJOR.MINOR.PATCH (Semantic Versioning)
__version__ = "0.4.0"


def get_version() -> str:
    """Return the current version string."""
    return __version__


def get_version_tuple() -> tuple[int, int, int]:
    """Return the version as a tuple of (major, minor, patch)."""
    parts = __version__.split(".")
    return (int(parts[0]), int(parts[1]), int(parts[2]))
