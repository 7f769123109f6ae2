"""
Pocket data models.
"""

from __future__ import annotations

from dataclasses import dataclass as std_dataclass
from dataclasses import field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.dataclasses import dataclass


class PocketKind(StrEnum):
    """The closed set of pocket kinds.

    Members compare equal to (and hash like) their plain string value, so
    ``cache["hd"]`` and ``cache[PocketKind.HD]`` reach the same entry.
    """

    HD = "hd"
    MULTISIG = "multisig"
    READONLY = "readonly"


# Pocket ids: slot index for HD pockets, fund address or watch id otherwise
PocketId = int | str


class PocketRecord(BaseModel):
    """Persisted HD pocket record.

    Keys other than ``name`` belong to whoever wrote them and are kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    name: str


@dataclass
class WalletAddress:
    """An address handed to the registry for pocket assignment."""

    address: str
    type: str  # address-type tag, e.g. "hd", "stealth", "multisig"
    index: list[int | str]  # index[0] is the branch (HD) or fund address (multisig)
    label: str = ""

    @field_validator("index")
    @classmethod
    def _index_not_empty(cls, value: list[int | str]) -> list[int | str]:
        if not value:
            raise ValueError("index must contain at least one element")
        return value

    @property
    def branch(self) -> int | str:
        """First index element, which selects the owning pocket."""
        return self.index[0]


@dataclass
class MultisigFund:
    """A multisig fund known to the wallet."""

    address: str
    name: str
    m: int | None = None  # required signatures, None for placeholder funds
    pubkeys: list[str] = field(default_factory=list)

    @property
    def is_placeholder(self) -> bool:
        return self.m is None and not self.pubkeys


@std_dataclass(frozen=True)
class PocketWallet:
    """Snapshot of a pocket's addresses handed to spending code."""

    kind: PocketKind
    pocket_id: PocketId
    name: str
    addresses: tuple[str, ...]
    change_addresses: tuple[str, ...]
    can_sign: bool
    wallet: Any = None
    fund: MultisigFund | None = None

    @property
    def all_addresses(self) -> tuple[str, ...]:
        return self.addresses + self.change_addresses
