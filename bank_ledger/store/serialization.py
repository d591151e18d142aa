"""Pipe-delimited line codec for accounts and transactions."""

from bank_ledger.exceptions import MalformedRecordError
from bank_ledger.models import DEFAULT_DAILY_WITHDRAW_LIMIT, Account, Transaction, TransactionType

FIELD_SEPARATOR = "|"
FIELD_COUNT = 5
RESERVED_CHARACTERS = (FIELD_SEPARATOR, "\n", "\r")


def serialize_account(account: Account) -> str:
    """``accountNumber|customerName|balance|withdrawnToday|lastInterestApplied``.

    Fields are not escaped: a separator or line break inside the customer
    name produces a line that will be skipped on the next load.
    """
    return FIELD_SEPARATOR.join(
        [
            account.account_number,
            account.customer_name,
            format_amount(account.balance),
            format_amount(account.withdrawn_today),
            account.last_interest_applied,
        ]
    )


def serialize_transaction(transaction: Transaction) -> str:
    """``accountNumber|type|amount|timestamp|remark``."""
    return FIELD_SEPARATOR.join(
        [
            transaction.account_number,
            transaction.transaction_type.value,
            format_amount(transaction.amount),
            transaction.timestamp,
            transaction.remark,
        ]
    )


def deserialize_account(
    line: str,
    daily_withdraw_limit: float = DEFAULT_DAILY_WITHDRAW_LIMIT,
) -> Account:
    """Decode one accounts-file line.

    Raises
    ------
    MalformedRecordError
        On a wrong field count or a non-numeric amount.
    """
    number, name, balance, withdrawn, last_interest = _split(line)
    return Account(
        account_number=number,
        customer_name=name,
        balance=parse_amount(balance, "balance"),
        withdrawn_today=parse_amount(withdrawn, "withdrawn_today"),
        last_interest_applied=last_interest,
        daily_withdraw_limit=daily_withdraw_limit,
    )


def deserialize_transaction(line: str) -> Transaction:
    """Decode one transactions-file line.

    Raises
    ------
    MalformedRecordError
        On a wrong field count, an unknown type or a non-numeric amount.
    """
    number, type_name, amount, timestamp, remark = _split(line)
    try:
        transaction_type = TransactionType(type_name)
    except ValueError:
        raise MalformedRecordError(f"unknown transaction type {type_name!r}") from None
    return Transaction(
        account_number=number,
        transaction_type=transaction_type,
        amount=parse_amount(amount, "amount"),
        timestamp=timestamp,
        remark=remark,
    )


def format_amount(value: float) -> str:
    """Format a float so that ``float(text)`` gives back the same value."""
    return repr(float(value))


def parse_amount(text: str, field_name: str) -> float:
    """Parse anything ``float()`` accepts, including ``inf`` and ``nan``."""
    try:
        return float(text)
    except ValueError:
        raise MalformedRecordError(f"{field_name} is not numeric: {text!r}") from None


def reserved_characters(text: str) -> list[str]:
    """Characters in ``text`` that would split its record when written."""
    return [c for c in RESERVED_CHARACTERS if c in text]


def _split(line: str) -> list[str]:
    # str.split keeps empty trailing fields
    parts = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(parts) != FIELD_COUNT:
        raise MalformedRecordError(f"expected {FIELD_COUNT} fields, got {len(parts)}")
    return parts
