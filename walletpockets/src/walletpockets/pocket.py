"""
Pocket types.

Every pocket kind is a class carrying its own descriptor as class attributes
(``kind``, ``address_types``, ``auto_create``) and a ``get_index`` classmethod
mapping a wallet address to the id of the pocket that owns it. The registry
uses the class itself as the factory.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from loguru import logger

from walletpockets.models import (
    MultisigFund,
    PocketId,
    PocketKind,
    PocketRecord,
    PocketWallet,
    WalletAddress,
)

if TYPE_CHECKING:
    from walletpockets.registry import PocketRegistry


@dataclass(frozen=True)
class PocketContext:
    """
    Non-owning handle from a pocket back to where it lives.

    The registry is held through a weak reference: a pocket can look things up
    while the registry is alive but never keeps it alive.
    """

    wallet: Any
    _registry_ref: weakref.ReferenceType[PocketRegistry] | None = None

    @classmethod
    def for_registry(cls, registry: PocketRegistry) -> PocketContext:
        return cls(wallet=registry.wallet, _registry_ref=weakref.ref(registry))

    @property
    def registry(self) -> PocketRegistry | None:
        if self._registry_ref is None:
            return None
        return self._registry_ref()


class Pocket:
    """Base pocket: keeps receiving and change addresses in arrival order."""

    kind: ClassVar[PocketKind]
    address_types: ClassVar[tuple[str, ...]] = ()
    auto_create: ClassVar[bool] = False
    can_sign: ClassVar[bool] = True

    def __init__(self, pocket_id: PocketId, context: PocketContext, record: Any = None):
        self.pocket_id = pocket_id
        self.context = context
        self.record = record if record is not None else PocketRecord(name=str(pocket_id))
        self.addresses: list[str] = []
        self.change_addresses: list[str] = []

    @classmethod
    def get_index(cls, address: WalletAddress) -> PocketId:
        return address.branch

    @property
    def name(self) -> str:
        return self.record.name

    def is_change(self, address: WalletAddress) -> bool:
        return False

    def add_to_pocket(self, address: WalletAddress) -> None:
        target = self.change_addresses if self.is_change(address) else self.addresses
        if address.address in target:
            return
        target.append(address.address)
        logger.trace(f"Added {address.address} to {self.kind} pocket {self.pocket_id!r}")

    def get_addresses(self) -> list[str]:
        return list(self.addresses)

    def get_change_addresses(self) -> list[str]:
        return list(self.change_addresses)

    def get_all_addresses(self) -> list[str]:
        return self.addresses + self.change_addresses

    def get_wallet(self) -> PocketWallet:
        return PocketWallet(
            kind=self.kind,
            pocket_id=self.pocket_id,
            name=self.name,
            addresses=tuple(self.addresses),
            change_addresses=tuple(self.change_addresses),
            can_sign=self.can_sign,
            wallet=self.context.wallet,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.pocket_id!r}, name={self.name!r})"


class HdPocket(Pocket):
    """
    Pocket backed by a pair of HD branches.

    Pocket ``n`` owns branch ``2n`` for receiving and ``2n + 1`` for change,
    so the pocket id is the address branch halved.
    """

    kind = PocketKind.HD
    address_types = ("hd", "stealth")
    auto_create = False

    @classmethod
    def get_index(cls, address: WalletAddress) -> int:
        branch = address.branch
        if not isinstance(branch, int):
            raise ValueError(f"HD address {address.address} has non-numeric branch {branch!r}")
        return branch // 2

    def is_change(self, address: WalletAddress) -> bool:
        return isinstance(address.branch, int) and address.branch % 2 == 1


class MultisigPocket(Pocket):
    """Pocket for a multisig fund, keyed by the fund address."""

    kind = PocketKind.MULTISIG
    address_types = ("multisig",)
    auto_create = True

    def __init__(self, pocket_id: PocketId, context: PocketContext, record: Any = None):
        if record is None:
            record = MultisigFund(address=str(pocket_id), name=str(pocket_id))
        super().__init__(pocket_id, context, record)

    @property
    def fund(self) -> MultisigFund:
        return self.record

    def get_wallet(self) -> PocketWallet:
        wallet = super().get_wallet()
        return PocketWallet(
            kind=wallet.kind,
            pocket_id=wallet.pocket_id,
            name=wallet.name,
            addresses=wallet.addresses,
            change_addresses=wallet.change_addresses,
            can_sign=wallet.can_sign,
            wallet=wallet.wallet,
            fund=self.fund,
        )


class ReadOnlyPocket(Pocket):
    """Watch-only pocket. Its addresses can be listed but never spent from."""

    kind = PocketKind.READONLY
    address_types = ("readonly",)
    auto_create = True
    can_sign = False


POCKET_TYPES: tuple[type[Pocket], ...] = (HdPocket, MultisigPocket, ReadOnlyPocket)
