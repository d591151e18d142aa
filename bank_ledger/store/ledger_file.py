"""Text-file persistence for the ledger."""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, TypeVar

from bank_ledger.exceptions import MalformedRecordError, StorageError
from bank_ledger.models import DEFAULT_DAILY_WITHDRAW_LIMIT, Account, Transaction
from bank_ledger.store.serialization import (
    deserialize_account,
    deserialize_transaction,
    serialize_account,
    serialize_transaction,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SkippedRecord:
    """A persisted line that could not be decoded and was left out."""

    source: str
    line_number: int
    line: str
    reason: str


@dataclass
class LoadReport:
    """Everything read from disk, plus the lines that were skipped."""

    accounts: list[Account] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    skipped: list[SkippedRecord] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        """True if no line had to be skipped."""
        return not self.skipped


class LedgerFileStore:
    """Reads and rewrites the accounts and transactions files.

    Every save rewrites both files in full. Each file is written to a
    temporary sibling and moved over the old one, so a crash leaves either
    the previous or the new contents, never a truncated file.

    Parameters
    ----------
    accounts_path : str | Path
        Accounts file location.
    transactions_path : str | Path
        Transactions file location.
    daily_withdraw_limit : float
        Limit given to every loaded account (the limit is not persisted).
    """

    def __init__(
        self,
        accounts_path: str | Path,
        transactions_path: str | Path,
        daily_withdraw_limit: float = DEFAULT_DAILY_WITHDRAW_LIMIT,
    ) -> None:
        self.accounts_path = Path(accounts_path)
        self.transactions_path = Path(transactions_path)
        self.daily_withdraw_limit = daily_withdraw_limit

    def load(self) -> LoadReport:
        """Read both files, creating empty ones if absent.

        Raises
        ------
        StorageError
            If a file exists but cannot be read, or cannot be created.
        """
        report = LoadReport()
        report.accounts = self._read_records(
            self.accounts_path,
            lambda line: deserialize_account(line, self.daily_withdraw_limit),
            report.skipped,
        )
        report.transactions = self._read_records(
            self.transactions_path, deserialize_transaction, report.skipped
        )
        logger.info(
            "Loaded %d accounts and %d transactions (%d lines skipped)",
            len(report.accounts),
            len(report.transactions),
            len(report.skipped),
        )
        return report

    def save(self, accounts: Iterable[Account], transactions: Iterable[Transaction]) -> None:
        """Overwrite both files with the given records, in order.

        Raises
        ------
        StorageError
            If either file cannot be written.
        """
        self._write_lines(self.accounts_path, (serialize_account(a) for a in accounts))
        self._write_lines(
            self.transactions_path, (serialize_transaction(t) for t in transactions)
        )
        logger.debug("Saved ledger to %s and %s", self.accounts_path, self.transactions_path)

    def _read_records(
        self,
        path: Path,
        decode: Callable[[str], T],
        skipped: list[SkippedRecord],
    ) -> list[T]:
        self._ensure_file(path)
        try:
            with open(path, encoding="utf-8", newline="") as f:
                lines = f.read().split("\n")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Cannot read {path}: {exc}") from exc

        records: list[T] = []
        for line_number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r")
            if not line.strip():
                continue
            try:
                records.append(decode(line))
            except MalformedRecordError as exc:
                logger.warning("Skipping %s line %d: %s", path.name, line_number, exc)
                skipped.append(SkippedRecord(path.name, line_number, line, str(exc)))
        return records

    def _ensure_file(self, path: Path) -> None:
        if path.exists():
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as exc:
            raise StorageError(f"Cannot create {path}: {exc}") from exc
        logger.info("Created empty ledger file %s", path)

    def _write_lines(self, path: Path, lines: Iterable[str]) -> None:
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                newline="",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                for line in lines:
                    f.write(line + "\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except (OSError, UnicodeEncodeError) as exc:
            raise StorageError(f"Cannot write {path}: {exc}") from exc
        finally:
            # gone after a successful replace
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
