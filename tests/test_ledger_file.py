"""Tests for LedgerFileStore load/save."""

import os
from pathlib import Path

import pytest

from bank_ledger.exceptions import StorageError
from bank_ledger.models import Account, Transaction, TransactionType
from bank_ledger.store import LedgerFileStore, LoadReport, SkippedRecord


@pytest.fixture
def accounts() -> list[Account]:
    return [
        Account("ACC1", "Alice", 500.0, 500.0, "2024-01"),
        Account("ACC2", "Bob", 0.1 + 0.2, 0.0, ""),
    ]


@pytest.fixture
def transactions() -> list[Transaction]:
    return [
        Transaction("ACC1", TransactionType.DEPOSIT, 1000.0, "2024-01-15 10:30:00"),
        Transaction("ACC2", TransactionType.DEPOSIT, 0.3, "2024-01-15 10:31:00", "Gift"),
        Transaction("ACC1", TransactionType.WITHDRAW, 500.0, "2024-01-15 10:32:00", "ATM"),
    ]


class TestLoad:
    """Tests for reading the ledger files."""

    def test_creates_missing_files(self, store: LedgerFileStore) -> None:
        """Test that absent files are created empty."""
        report = store.load()

        assert store.accounts_path.exists()
        assert store.transactions_path.exists()
        assert store.accounts_path.read_text() == ""
        assert report == LoadReport()
        assert report.clean

    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        store = LedgerFileStore(tmp_path / "a" / "b" / "acc.txt", tmp_path / "c" / "tx.txt")
        store.load()
        assert (tmp_path / "a" / "b" / "acc.txt").exists()
        assert (tmp_path / "c" / "tx.txt").exists()

    def test_skips_malformed_lines(self, store: LedgerFileStore) -> None:
        """Test that bad lines are reported and the rest still loads."""
        store.accounts_path.write_text(
            "ACC1|Alice|100.0|0.0|\n"
            "ACC2|Bob|not-a-number|0.0|\n"
            "\n"
            "ACC3|Carol|5.0|0.0|2024-01\n"
            "garbage\n",
            encoding="utf-8",
        )
        store.transactions_path.write_text(
            "ACC1|DEPOSIT|100.0|2024-01-15 10:30:00|\n"
            "ACC1|REFUND|5.0|2024-01-15 10:31:00|\n",
            encoding="utf-8",
        )

        report = store.load()

        assert [a.account_number for a in report.accounts] == ["ACC1", "ACC3"]
        assert len(report.transactions) == 1
        assert not report.clean
        assert [(s.source, s.line_number) for s in report.skipped] == [
            ("accounts.txt", 2),
            ("accounts.txt", 5),
            ("transactions.txt", 2),
        ]
        assert report.skipped[1] == SkippedRecord(
            "accounts.txt", 5, "garbage", "expected 5 fields, got 1"
        )

    def test_crlf_lines(self, store: LedgerFileStore) -> None:
        store.accounts_path.write_bytes(b"ACC1|Alice|1.0|0.0|2024-01\r\n")
        store.transactions_path.write_bytes(b"")

        report = store.load()

        assert report.accounts[0].last_interest_applied == "2024-01"

    def test_loaded_accounts_get_configured_limit(self, tmp_path: Path) -> None:
        store = LedgerFileStore(
            tmp_path / "accounts.txt", tmp_path / "transactions.txt", daily_withdraw_limit=300.0
        )
        (tmp_path / "accounts.txt").write_text("ACC1|Alice|1.0|0.0|\n")

        assert store.load().accounts[0].daily_withdraw_limit == 300.0

    def test_unreadable_file_aborts(self, store: LedgerFileStore) -> None:
        store.accounts_path.mkdir()

        with pytest.raises(StorageError):
            store.load()

    def test_undecodable_file_aborts(self, store: LedgerFileStore) -> None:
        store.accounts_path.write_bytes(b"ACC1|\xff\xfe|1.0|0.0|\n")

        with pytest.raises(StorageError):
            store.load()


class TestSave:
    """Tests for rewriting the ledger files."""

    def test_writes_one_line_per_record(
        self, store: LedgerFileStore, accounts: list[Account], transactions: list[Transaction]
    ) -> None:
        store.save(accounts, transactions)

        assert store.accounts_path.read_text(encoding="utf-8") == (
            "ACC1|Alice|500.0|500.0|2024-01\n"
            f"ACC2|Bob|{0.1 + 0.2!r}|0.0|\n"
        )
        assert store.transactions_path.read_text(encoding="utf-8").splitlines() == [
            "ACC1|DEPOSIT|1000.0|2024-01-15 10:30:00|",
            "ACC2|DEPOSIT|0.3|2024-01-15 10:31:00|Gift",
            "ACC1|WITHDRAW|500.0|2024-01-15 10:32:00|ATM",
        ]

    def test_round_trip_preserves_order_and_values(
        self, store: LedgerFileStore, accounts: list[Account], transactions: list[Transaction]
    ) -> None:
        store.save(accounts, transactions)
        report = store.load()

        assert report.accounts == accounts
        assert report.transactions == transactions
        assert report.clean

    def test_overwrites_previous_contents(
        self, store: LedgerFileStore, accounts: list[Account], transactions: list[Transaction]
    ) -> None:
        store.save(accounts, transactions)
        store.save(accounts[:1], [])

        assert store.accounts_path.read_text().count("\n") == 1
        assert store.transactions_path.read_text() == ""

    def test_leaves_no_temporary_files(
        self, store: LedgerFileStore, accounts: list[Account], transactions: list[Transaction]
    ) -> None:
        store.save(accounts, transactions)
        assert sorted(p.name for p in store.accounts_path.parent.iterdir()) == [
            "accounts.txt",
            "transactions.txt",
        ]

    def test_failed_replace_keeps_old_file(
        self,
        store: LedgerFileStore,
        accounts: list[Account],
        transactions: list[Transaction],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that a failed write leaves the previous file intact."""
        store.save(accounts, transactions)
        before = store.accounts_path.read_text()

        def fail_replace(src: str, dst: str) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", fail_replace)

        with pytest.raises(StorageError, match="disk full"):
            store.save([], [])

        assert store.accounts_path.read_text() == before
        assert not [p for p in store.accounts_path.parent.iterdir() if p.suffix == ".tmp"]

    def test_unencodable_text_keeps_old_file(
        self, store: LedgerFileStore, accounts: list[Account], transactions: list[Transaction]
    ) -> None:
        """Test that a lone surrogate raises StorageError and leaves no temp file."""
        store.save(accounts, transactions)
        before = store.accounts_path.read_text()

        with pytest.raises(StorageError, match="accounts.txt"):
            store.save([Account("ACC1", "Al\udcffce")], [])

        assert store.accounts_path.read_text() == before
        assert not [p for p in store.accounts_path.parent.iterdir() if p.suffix == ".tmp"]

    def test_unwritable_location(self, tmp_path: Path) -> None:
        (tmp_path / "blocker").write_text("")
        store = LedgerFileStore(tmp_path / "blocker" / "accounts.txt", tmp_path / "tx.txt")

        with pytest.raises(StorageError):
            store.save([], [])
