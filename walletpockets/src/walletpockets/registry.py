"""
Pocket registry.

Owns the pocket type tables, the cache of live pocket objects keyed by kind
and id, and the persisted list of HD pocket records. All access is expected
from a single thread; nothing here takes locks.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from loguru import logger

from walletpockets.errors import (
    DuplicateNameError,
    NotFoundError,
    PocketTypeConflictError,
    UnknownAddressTypeError,
)
from walletpockets.models import PocketId, PocketKind, PocketRecord, PocketWallet, WalletAddress
from walletpockets.pocket import POCKET_TYPES, Pocket, PocketContext
from walletpockets.store import POCKETS_KEY, PocketSlots, Store
from walletpockets.wallet import single_predicate

DEFAULT_POCKETS: tuple[str, ...] = ("spending", "savings")


class PocketRegistry:
    """
    Registry of a wallet's pockets.

    HD pockets are loaded eagerly from the store. Multisig and read-only
    pockets are built the first time one of their addresses shows up (or on an
    explicit :meth:`init_pocket_wallet` call) and are never persisted here.
    """

    def __init__(
        self,
        store: Store,
        wallet: Any,
        default_pockets: Iterable[str] = DEFAULT_POCKETS,
    ):
        self.store = store
        self.wallet = wallet
        self.default_pockets = tuple(default_pockets)
        self.context = PocketContext.for_registry(self)
        self.register_types()
        self.initialize(store)

    def register_types(self) -> None:
        self.pocket_types: dict[str, type[Pocket]] = {}
        self.address_types: dict[str, type[Pocket]] = {}
        for pocket_type in POCKET_TYPES:
            self.register_type(pocket_type)

    def register_type(self, pocket_type: type[Pocket]) -> None:
        """
        Register a pocket class under its kind and claim its address types.

        Registering a new class for a kind replaces the previous class and
        releases the address types only the previous class claimed.

        Raises:
            PocketTypeConflictError: If the kind is not a :class:`PocketKind`,
                or an address type is already owned by another kind.
        """
        kind = pocket_type.kind
        if kind not in tuple(PocketKind):
            raise PocketTypeConflictError(f"Unknown pocket kind {kind!r}")
        for address_type in pocket_type.address_types:
            owner = self.address_types.get(address_type)
            if owner is not None and owner.kind != kind:
                raise PocketTypeConflictError(
                    f"Address type {address_type!r} already belongs to {owner.kind} pockets"
                )

        previous = self.pocket_types.get(kind)
        if previous is not None:
            for address_type in previous.address_types:
                if self.address_types.get(address_type) is previous:
                    del self.address_types[address_type]

        self.pocket_types[kind] = pocket_type
        for address_type in pocket_type.address_types:
            self.address_types[address_type] = pocket_type
        logger.trace(f"Registered {kind} pockets for {list(pocket_type.address_types)}")

    def _resolve(self, address_type: str) -> type[Pocket]:
        pocket_type = self.address_types.get(address_type)
        if pocket_type is None:
            raise UnknownAddressTypeError(f"Unknown address type! {address_type}")
        return pocket_type

    def initialize(self, store: Store) -> list[PocketRecord | None]:
        """
        Load HD pocket records and build their pockets.

        Returns:
            The raw record list held by the store (tombstones included)
        """
        default = [PocketRecord(name=name) for name in self.default_pockets]
        self.hd_pockets = PocketSlots(store.init(POCKETS_KEY, default))

        self.pockets: dict[str, dict[PocketId, Pocket]] = {kind: {} for kind in PocketKind}
        for index, record in self.hd_pockets.live():
            self.init_pocket_wallet(PocketKind.HD, index, record)

        logger.debug(
            f"Loaded {len(self.pockets[PocketKind.HD])} HD pockets "
            f"({len(self.hd_pockets)} slots)"
        )
        return self.hd_pockets.raw

    def create_pocket(self, name: str) -> Pocket:
        """
        Create a new HD pocket at the next free index and persist it.

        Raises:
            DuplicateNameError: If an HD pocket with this name already exists
        """
        if self.search(PocketKind.HD, name=name):
            raise DuplicateNameError(f"Pocket with name {name!r} already exists!")
        record = PocketRecord(name=name)
        index = self.hd_pockets.append(record)
        pocket = self.init_pocket_wallet(PocketKind.HD, index, record)
        self.store.save()
        logger.info(f"Created pocket {name!r} at index {index}")
        return pocket

    def init_pocket_wallet(
        self, kind: PocketKind | str, pocket_id: PocketId, record: Any = None
    ) -> Pocket | None:
        """
        Build a pocket and put it in the cache.

        Multisig pockets always take their record from the wallet's fund list; a
        missing fund is replaced by a placeholder named after the address.
        An unregistered kind is logged and yields ``None``.
        """
        pocket_type = self.pocket_types.get(kind)
        if pocket_type is None or kind not in self.pockets:
            logger.warning(f"Could not create pocket of unknown kind {kind!r}")
            return None

        if pocket_type.kind == PocketKind.MULTISIG:
            record = self.wallet.multisig.search(address=pocket_id)
            if record is None:
                logger.warning(f"No fund for multisig address {pocket_id}, using placeholder")

        pocket = pocket_type(pocket_id, self.context, record)
        self.pockets[pocket_type.kind][pocket_id] = pocket
        logger.debug(f"Initialized {pocket_type.kind} pocket {pocket_id!r}")
        return pocket

    def search(self, kind: PocketKind | str, **query: Any) -> Pocket | None:
        """
        Find the first cached pocket of ``kind`` whose attribute matches.

        Exactly one predicate is supported, e.g. ``search("hd", name="savings")``.
        """
        field, value = single_predicate(query)
        for pocket in self.pockets[kind].values():
            if getattr(pocket, field, None) == value:
                return pocket
        return None

    def get_pocket(self, pocket_id: PocketId, address_type: str) -> Pocket | None:
        return self.pockets[self._resolve(address_type).kind].get(pocket_id)

    def get_pockets(self, address_type: str) -> dict[PocketId, Pocket]:
        """Return the whole cache for the kind owning ``address_type``."""
        return self.pockets[self._resolve(address_type).kind]

    def get_address_pocket_id(self, address: WalletAddress) -> PocketId:
        return self._resolve(address.type).get_index(address)

    def _require(self, kind: PocketKind | str, pocket_id: PocketId) -> Pocket:
        try:
            return self.pockets[kind][pocket_id]
        except KeyError:
            raise NotFoundError(f"No {kind} pocket with id {pocket_id!r}") from None

    def delete_pocket(self, kind: PocketKind | str, pocket_id: PocketId) -> None:
        """
        Drop a pocket from the cache and, for HD pockets, tombstone its record.

        Raises:
            NotFoundError: If an HD pocket was cached but its record is missing
                from the store (cache and store have diverged)
        """
        old_pocket = self.pockets[kind].pop(pocket_id, None)
        if old_pocket is None:
            return
        self.store.save()

        if kind == PocketKind.HD:
            index = self.hd_pockets.find_by_name(old_pocket.name)
            if index is None:
                raise NotFoundError(f"Pocket with name {old_pocket.name!r} does not exist!")
            self.hd_pockets.tombstone(index)
            self.store.save()
        logger.info(f"Deleted {kind} pocket {old_pocket.name!r} ({pocket_id!r})")

    def add_to_pocket(self, address: WalletAddress) -> Pocket:
        """
        Assign an address to its pocket, creating the pocket if its kind allows.

        Raises:
            UnknownAddressTypeError: If the address type is not registered
            NotFoundError: If the pocket does not exist and its kind is not
                auto-created
        """
        pocket_type = self._resolve(address.type)
        pocket_id = pocket_type.get_index(address)
        cache = self.pockets[pocket_type.kind]
        if pocket_type.auto_create and pocket_id not in cache:
            self.init_pocket_wallet(pocket_type.kind, pocket_id)
        pocket = self._require(pocket_type.kind, pocket_id)
        pocket.add_to_pocket(address)
        return pocket

    def get_addresses(
        self, pocket_id: PocketId, kind: PocketKind | str = PocketKind.HD
    ) -> list[str]:
        return self._require(kind, pocket_id).get_addresses()

    def get_change_addresses(
        self, pocket_id: PocketId, kind: PocketKind | str = PocketKind.HD
    ) -> list[str]:
        return self._require(kind, pocket_id).get_change_addresses()

    def get_all_addresses(
        self, pocket_id: PocketId, kind: PocketKind | str = PocketKind.HD
    ) -> list[str]:
        return self._require(kind, pocket_id).get_all_addresses()

    def get_pocket_wallet(self, pocket_id: PocketId, kind: PocketKind | str) -> PocketWallet:
        """Return the spending view of a pocket. The kind is always explicit."""
        return self._require(kind, pocket_id).get_wallet()

    def __repr__(self) -> str:
        counts = ", ".join(f"{kind}={len(cache)}" for kind, cache in self.pockets.items())
        return f"PocketRegistry({counts})"
