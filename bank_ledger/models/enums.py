"""Enumeration types for ledger entities."""

from enum import Enum


class TransactionType(str, Enum):
    """Kinds of event recorded in the ledger history."""

    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    INTEREST = "INTEREST"


class WithdrawFailure(str, Enum):
    """Reasons a withdrawal is refused without touching the balance."""

    INVALID_AMOUNT = "INVALID_AMOUNT"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    DAILY_LIMIT_EXCEEDED = "DAILY_LIMIT_EXCEEDED"
