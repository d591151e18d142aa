"""Tests for the demo ledger generator."""

import pytest

from bank_ledger.engine import BankEngine
from bank_ledger.generators import DemoLedgerGenerator
from bank_ledger.models import TransactionType
from bank_ledger.store import LedgerFileStore


class TestDemoLedgerGenerator:
    """Tests for DemoLedgerGenerator."""

    def test_generate_names(self, seed: int) -> None:
        names = list(DemoLedgerGenerator(seed=seed).generate_names(3))

        assert len(names) == 3
        assert all(isinstance(n, str) and n for n in names)

    def test_names_reproducible(self, seed: int) -> None:
        first = list(DemoLedgerGenerator(seed=seed).generate_names(5))
        second = list(DemoLedgerGenerator(seed=seed).generate_names(5))
        assert first == second

    def test_populate(self, engine: BankEngine, seed: int) -> None:
        numbers = DemoLedgerGenerator(seed=seed).populate(engine, 4, operations_per_account=6)

        assert numbers == ["ACC1", "ACC2", "ACC3", "ACC4"]
        for number in numbers:
            history = engine.history_of(number)
            assert history[0].transaction_type is TransactionType.DEPOSIT
            assert history[0].remark == "Opening deposit"
            assert 1 <= len(history) <= 7
            assert engine.balance_of(number) >= 0

    def test_populate_persists(self, engine: BankEngine, store: LedgerFileStore, seed: int) -> None:
        DemoLedgerGenerator(seed=seed).populate(engine, 2, operations_per_account=3)

        report = store.load()

        assert report.clean
        assert [a.account_number for a in report.accounts] == ["ACC1", "ACC2"]
        assert report.transactions == engine.history

    @pytest.mark.parametrize("locale", ["en_US", "pt_BR"])
    def test_locale(self, locale: str, seed: int) -> None:
        generator = DemoLedgerGenerator(seed=seed, locale=locale)
        assert next(generator.generate_names(1))
