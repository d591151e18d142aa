"""Transaction model for the append-only ledger history."""

from dataclasses import dataclass
from datetime import datetime

from bank_ledger.models.enums import TransactionType

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Transaction:
    """One ledger event. Never mutated once recorded."""

    account_number: str
    transaction_type: TransactionType
    amount: float
    timestamp: str  # YYYY-MM-DD HH:MM:SS
    remark: str = ""

    @classmethod
    def create(
        cls,
        account_number: str,
        transaction_type: TransactionType,
        amount: float,
        remark: str = "",
        now: datetime | None = None,
    ) -> "Transaction":
        """Build a transaction stamped with ``now`` (default: wall clock)."""
        when = now if now is not None else datetime.now()
        return cls(
            account_number=account_number,
            transaction_type=transaction_type,
            amount=amount,
            timestamp=when.strftime(TIMESTAMP_FORMAT),
            remark=remark,
        )

    def display(self) -> str:
        """Render as ``[timestamp] TYPE - amount (remark)``."""
        text = f"[{self.timestamp}] {self.transaction_type.value} - {self.amount}"
        if self.remark:
            text += f" ({self.remark})"
        return text

    def __str__(self) -> str:
        return self.display()
