"""Account and transaction ledger persisted as delimited text files."""

from bank_ledger.engine import AccountSummary, BankEngine, WithdrawResult

__all__ = ["AccountSummary", "BankEngine", "WithdrawResult"]
