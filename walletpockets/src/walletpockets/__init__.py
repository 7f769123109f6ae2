"""
Pocket registry for wallet address groupings.
"""

from walletpockets.errors import (
    DuplicateNameError,
    NotFoundError,
    PocketError,
    PocketTypeConflictError,
    StoreError,
    UnknownAddressTypeError,
)
from walletpockets.models import (
    MultisigFund,
    PocketKind,
    PocketRecord,
    PocketWallet,
    WalletAddress,
)
from walletpockets.pocket import HdPocket, MultisigPocket, Pocket, PocketContext, ReadOnlyPocket
from walletpockets.registry import PocketRegistry
from walletpockets.store import JsonFileStore, MemoryStore, PocketSlots
from walletpockets.version import __version__
from walletpockets.wallet import MultisigFunds, Wallet

__all__ = [
    "__version__",
    "PocketRegistry",
    "Pocket",
    "HdPocket",
    "MultisigPocket",
    "ReadOnlyPocket",
    "PocketContext",
    "PocketKind",
    "PocketRecord",
    "PocketWallet",
    "WalletAddress",
    "MultisigFund",
    "MultisigFunds",
    "Wallet",
    "MemoryStore",
    "JsonFileStore",
    "PocketSlots",
    "PocketError",
    "DuplicateNameError",
    "NotFoundError",
    "UnknownAddressTypeError",
    "PocketTypeConflictError",
    "StoreError",
]
