"""Ledger domain models."""

from bank_ledger.models.account import DEFAULT_DAILY_WITHDRAW_LIMIT, Account
from bank_ledger.models.enums import TransactionType, WithdrawFailure
from bank_ledger.models.transaction import TIMESTAMP_FORMAT, Transaction

__all__ = [
    "DEFAULT_DAILY_WITHDRAW_LIMIT",
    "TIMESTAMP_FORMAT",
    "Account",
    "Transaction",
    "TransactionType",
    "WithdrawFailure",
]
