"""Custom exception hierarchy for bank-ledger."""


class BankLedgerError(Exception):
    """Base exception for all bank-ledger errors."""


class AccountNotFoundError(BankLedgerError):
    """Raised when an operation names an account that does not exist."""


class StorageError(BankLedgerError):
    """Raised when a ledger file cannot be read or written."""


class MalformedRecordError(BankLedgerError):
    """Raised when a persisted line cannot be decoded."""


class ConfigurationError(BankLedgerError):
    """Raised when configuration is invalid or missing."""


class SelectionOutOfRangeError(BankLedgerError):
    """Raised when a menu ordinal does not match any listed account."""
