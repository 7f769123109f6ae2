"""
Shared fixtures for walletpockets tests.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest
from loguru import logger

from walletpockets.models import MultisigFund
from walletpockets.registry import PocketRegistry
from walletpockets.settings import reset_settings
from walletpockets.store import MemoryStore
from walletpockets.wallet import Wallet

FUND_ADDRESS = "3J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy"


@pytest.fixture(autouse=True)
def reset_settings_fixture() -> Generator[None, None, None]:
    """Reset settings before and after each test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def wallet() -> Wallet:
    return Wallet()


@pytest.fixture
def registry(store: MemoryStore, wallet: Wallet) -> PocketRegistry:
    return PocketRegistry(store, wallet)


@pytest.fixture
def team_fund() -> MultisigFund:
    return MultisigFund(
        address=FUND_ADDRESS,
        name="Team",
        m=2,
        pubkeys=["02" + "11" * 32, "02" + "22" * 32, "02" + "33" * 32],
    )


@pytest.fixture
def logged_warnings() -> Generator[list[str], None, None]:
    """Collect loguru WARNING (and above) messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
