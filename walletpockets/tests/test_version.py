"""Tests for the version module."""

from __future__ import annotations

import walletpockets
from walletpockets.version import __version__, get_version, get_version_tuple


def test_get_version() -> None:
    assert get_version() == __version__
    assert walletpockets.__version__ == __version__


def test_version_tuple_matches_string() -> None:
    major, minor, patch = get_version_tuple()
    assert f"{major}.{minor}.{patch}" == get_version()
