"""Persistence of the ledger as delimited text files."""

from bank_ledger.store.ledger_file import LedgerFileStore, LoadReport, SkippedRecord

__all__ = ["LedgerFileStore", "LoadReport", "SkippedRecord"]
