"""
Tests for the wallet collaborator.
"""

from __future__ import annotations

import pytest

from walletpockets.errors import DuplicateNameError, StoreError
from walletpockets.models import MultisigFund
from walletpockets.store import MemoryStore
from walletpockets.wallet import MultisigFunds, Wallet, single_predicate


def test_single_predicate() -> None:
    assert single_predicate({"address": "3Fund"}) == ("address", "3Fund")
    with pytest.raises(ValueError):
        single_predicate({})
    with pytest.raises(ValueError):
        single_predicate({"address": "3Fund", "name": "Team"})


class TestMultisigFunds:
    """Tests for fund lookup and registration."""

    def test_search(self, team_fund: MultisigFund) -> None:
        funds = MultisigFunds([team_fund])
        assert funds.search(address=team_fund.address) is team_fund
        assert funds.search(name="Team") is team_fund
        assert funds.search(address="3Nope") is None

    def test_loads_dicts(self) -> None:
        funds = MultisigFunds([{"address": "3Fund", "name": "Team", "m": 2}])
        fund = funds.search(address="3Fund")
        assert isinstance(fund, MultisigFund)
        assert fund.m == 2
        assert fund.pubkeys == []

    def test_invalid_fund_raises(self) -> None:
        with pytest.raises(StoreError):
            MultisigFunds([{"name": "no address"}])

    def test_add_rejects_duplicate_address(self, team_fund: MultisigFund) -> None:
        funds = MultisigFunds()
        funds.add(team_fund)
        with pytest.raises(DuplicateNameError):
            funds.add(MultisigFund(address=team_fund.address, name="Other"))
        assert len(funds) == 1


class TestWallet:
    def test_default_has_no_funds(self) -> None:
        assert len(Wallet().multisig) == 0

    def test_from_store_persists_funds(self, team_fund: MultisigFund) -> None:
        store = MemoryStore()
        wallet = Wallet.from_store(store)
        wallet.multisig.add(team_fund)

        assert store.data["multisig"] == [team_fund]
        assert store.save_count == 1

    def test_from_store_loads_existing(self) -> None:
        store = MemoryStore({"multisig": [{"address": "3Fund", "name": "Team"}]})
        wallet = Wallet.from_store(store)
        assert wallet.multisig.search(address="3Fund").name == "Team"
