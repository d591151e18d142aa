"""Pytest configuration and fixtures."""

from datetime import datetime
from pathlib import Path

import pytest

from bank_ledger.config import PolicyConfig
from bank_ledger.engine import BankEngine
from bank_ledger.store import LedgerFileStore


class FakeClock:
    """Settable clock for deterministic timestamps."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at 2024-01-15 10:30:00."""
    return FakeClock(datetime(2024, 1, 15, 10, 30, 0))


@pytest.fixture
def store(tmp_path: Path) -> LedgerFileStore:
    """Store writing into a fresh temp directory."""
    return LedgerFileStore(tmp_path / "accounts.txt", tmp_path / "transactions.txt")


@pytest.fixture
def engine(store: LedgerFileStore, clock: FakeClock) -> BankEngine:
    """Loaded engine with default policy."""
    engine = BankEngine(store, policy=PolicyConfig(), clock=clock)
    engine.load()
    return engine


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42
