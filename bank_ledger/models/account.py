"""Account model and its balance rules."""

from dataclasses import dataclass

from bank_ledger.models.enums import WithdrawFailure

DEFAULT_DAILY_WITHDRAW_LIMIT = 20000.0


@dataclass
class Account:
    """A single customer account.

    ``withdrawn_today`` accumulates across the account's lifetime: nothing
    resets it when the calendar day changes, so the daily limit behaves as
    a lifetime cap until a reset rule is agreed on.
    """

    account_number: str
    customer_name: str
    balance: float = 0.0
    withdrawn_today: float = 0.0
    last_interest_applied: str = ""  # YYYY-MM, empty if never applied
    daily_withdraw_limit: float = DEFAULT_DAILY_WITHDRAW_LIMIT

    def deposit(self, amount: float) -> None:
        """Add ``amount`` to the balance. The amount is not validated."""
        self.balance += amount

    def try_withdraw(self, amount: float) -> WithdrawFailure | None:
        """Withdraw ``amount`` if every rule allows it.

        Rules are checked in order: positive amount, daily limit, funds.

        Returns
        -------
        WithdrawFailure | None
            The first rule that refused the withdrawal, or ``None`` on
            success. Nothing is mutated on failure.
        """
        if not amount > 0:
            return WithdrawFailure.INVALID_AMOUNT
        if self.withdrawn_today + amount > self.daily_withdraw_limit:
            return WithdrawFailure.DAILY_LIMIT_EXCEEDED
        if amount > self.balance:
            return WithdrawFailure.INSUFFICIENT_FUNDS

        self.balance -= amount
        self.withdrawn_today += amount
        return None

    def apply_monthly_interest(self, rate: float, year_month: str) -> bool:
        """Credit ``balance * rate`` once per ``year_month``.

        Returns ``True`` if interest was credited, ``False`` if it had
        already been applied for that month.
        """
        if year_month == self.last_interest_applied:
            return False
        self.balance += self.balance * rate
        self.last_interest_applied = year_month
        return True
