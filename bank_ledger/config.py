"""Configuration management for bank-ledger."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from bank_ledger.exceptions import ConfigurationError

LOG_FORMATS = ("standard", "json")


@dataclass
class StorageConfig:
    """Location of the persisted ledger files."""

    data_dir: Path = field(default_factory=lambda: Path("data"))
    accounts_file: str = "accounts.txt"
    transactions_file: str = "transactions.txt"

    @property
    def accounts_path(self) -> Path:
        """Full path of the accounts file."""
        return self.data_dir / self.accounts_file

    @property
    def transactions_path(self) -> Path:
        """Full path of the transactions file."""
        return self.data_dir / self.transactions_file


@dataclass
class PolicyConfig:
    """Limits and rates enforced by the engine."""

    daily_withdraw_limit: float = 20000.0
    fraud_threshold: float = 0.80
    interest_rate: float = 0.01  # monthly


@dataclass
class BankConfig:
    """Main configuration for bank-ledger."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> "BankConfig":
        """Check value ranges, returning self so calls can be chained.

        Raises
        ------
        ConfigurationError
            If any value is out of range.
        """
        if self.policy.daily_withdraw_limit <= 0:
            raise ConfigurationError(
                f"daily_withdraw_limit must be positive, got {self.policy.daily_withdraw_limit}"
            )
        if not 0 < self.policy.fraud_threshold <= 1:
            raise ConfigurationError(
                f"fraud_threshold must be in (0, 1], got {self.policy.fraud_threshold}"
            )
        if self.policy.interest_rate < 0:
            raise ConfigurationError(
                f"interest_rate must not be negative, got {self.policy.interest_rate}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"Unknown log format: {self.log_format}")
        return self

    @classmethod
    def from_env(cls) -> "BankConfig":
        """Create config from environment variables."""
        storage = StorageConfig(
            data_dir=Path(os.getenv("BANK_DATA_DIR", "data")),
            accounts_file=os.getenv("BANK_ACCOUNTS_FILE", "accounts.txt"),
            transactions_file=os.getenv("BANK_TRANSACTIONS_FILE", "transactions.txt"),
        )

        policy = PolicyConfig(
            daily_withdraw_limit=_env_float("BANK_DAILY_LIMIT", 20000.0),
            fraud_threshold=_env_float("BANK_FRAUD_THRESHOLD", 0.80),
            interest_rate=_env_float("BANK_INTEREST_RATE", 0.01),
        )

        return cls(
            storage=storage,
            policy=policy,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        ).validate()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
