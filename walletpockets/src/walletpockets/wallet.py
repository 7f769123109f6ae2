"""
Minimal wallet collaborator.

The registry only asks the wallet for its multisig funds. This module supplies
that surface, optionally persisted in the same store as the pockets.
"""

from __future__ import annotations

from collections.abc import Iterator, MutableSequence
from typing import Any

from loguru import logger
from pydantic import ValidationError

from walletpockets.errors import DuplicateNameError, StoreError
from walletpockets.models import MultisigFund

MULTISIG_KEY = "multisig"


def single_predicate(query: dict[str, Any]) -> tuple[str, Any]:
    """Unpack a search query that must hold exactly one ``field=value`` pair."""
    if len(query) != 1:
        raise ValueError(f"Search takes exactly one predicate, got {sorted(query)}")
    ((field, value),) = query.items()
    return field, value


class MultisigFunds:
    """Ordered collection of multisig funds."""

    def __init__(self, funds: MutableSequence[Any] | None = None, store: Any = None):
        self.funds: MutableSequence[Any] = funds if funds is not None else []
        self.store = store
        for i, entry in enumerate(self.funds):
            if isinstance(entry, MultisigFund):
                continue
            try:
                self.funds[i] = MultisigFund(**entry)
            except (TypeError, ValidationError) as e:
                raise StoreError(f"Invalid multisig fund at position {i}: {entry!r}") from e

    def __len__(self) -> int:
        return len(self.funds)

    def __iter__(self) -> Iterator[MultisigFund]:
        return iter(self.funds)

    def search(self, **query: Any) -> MultisigFund | None:
        """Return the first fund whose attribute matches, e.g. ``search(address=...)``."""
        field, value = single_predicate(query)
        for fund in self.funds:
            if getattr(fund, field, None) == value:
                return fund
        return None

    def add(self, fund: MultisigFund) -> MultisigFund:
        if self.search(address=fund.address):
            raise DuplicateNameError(f"Multisig fund {fund.address} already exists!")
        self.funds.append(fund)
        logger.info(f"Added multisig fund {fund.name} ({fund.address})")
        if self.store is not None:
            self.store.save()
        return fund


class Wallet:
    """Holds the wallet state the pocket registry consults."""

    def __init__(self, multisig: MultisigFunds | None = None):
        self.multisig = multisig if multisig is not None else MultisigFunds()

    @classmethod
    def from_store(cls, store: Any) -> Wallet:
        funds = store.init(MULTISIG_KEY, [])
        return cls(MultisigFunds(funds, store=store))
