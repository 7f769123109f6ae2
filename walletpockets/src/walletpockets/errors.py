"""
Exceptions raised by the pocket registry and its collaborators.
"""

from __future__ import annotations


class PocketError(Exception):
    """Base class for all pocket errors."""


class DuplicateNameError(PocketError):
    pass


class NotFoundError(PocketError):
    pass


class UnknownAddressTypeError(PocketError):
    pass


class PocketTypeConflictError(PocketError):
    pass


class StoreError(PocketError):
    pass
