"""Bank engine: owns the ledger and sequences every operation."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from bank_ledger.config import BankConfig, PolicyConfig
from bank_ledger.exceptions import AccountNotFoundError, StorageError
from bank_ledger.models import Account, Transaction, TransactionType, WithdrawFailure
from bank_ledger.store import LedgerFileStore, LoadReport
from bank_ledger.store.serialization import reserved_characters

logger = logging.getLogger(__name__)

ACCOUNT_PREFIX = "ACC"


@dataclass(frozen=True)
class WithdrawResult:
    """Outcome of a withdrawal request."""

    failure: WithdrawFailure | None = None
    fraud_warning: bool = False
    persisted: bool = False

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class AccountSummary:
    """Row of the account listing shown to the user."""

    account_number: str
    customer_name: str
    balance: float


class BankEngine:
    """In-memory ledger of accounts and history, saved after each change.

    The engine is the only owner of its collections. Projections such as
    ``list_accounts`` and ``history_of`` return new lists of immutable
    values; ``get_account`` hands out the live record.

    Parameters
    ----------
    store : LedgerFileStore
        Persistence backend.
    policy : PolicyConfig | None
        Limits and rates (defaults if omitted).
    clock : Callable[[], datetime]
        Source of "now" for timestamps and the interest month.
    """

    def __init__(
        self,
        store: LedgerFileStore,
        policy: PolicyConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.policy = policy or PolicyConfig()
        self.clock = clock
        self.accounts: dict[str, Account] = {}
        self.history: list[Transaction] = []
        self.load_report: LoadReport | None = None
        self.last_save_error: StorageError | None = None

    @classmethod
    def open(
        cls,
        config: BankConfig,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "BankEngine":
        """Build the store from ``config`` and load the persisted ledger."""
        store = LedgerFileStore(
            config.storage.accounts_path,
            config.storage.transactions_path,
            daily_withdraw_limit=config.policy.daily_withdraw_limit,
        )
        engine = cls(store, policy=config.policy, clock=clock)
        engine.load()
        return engine

    def load(self) -> LoadReport:
        """Replace in-memory state with the persisted ledger.

        Raises
        ------
        StorageError
            If a ledger file is inaccessible.
        """
        report = self.store.load()
        self.accounts = {}
        for account in report.accounts:
            if account.account_number in self.accounts:
                logger.warning(
                    "Duplicate account %s in ledger, keeping last",
                    account.account_number,
                    extra={"account_number": account.account_number},
                )
            self.accounts[account.account_number] = account
        self.history = list(report.transactions)
        self.load_report = report
        return report

    # Mutating operations

    def create_account(self, name: str) -> str:
        """Open a zero-balance account and return its number."""
        number = self._next_account_number()
        self._warn_reserved(number, "Customer name", name)
        self.accounts[number] = Account(
            account_number=number,
            customer_name=name,
            daily_withdraw_limit=self.policy.daily_withdraw_limit,
        )
        logger.info("Created account %s for %s", number, name, extra={"account_number": number})
        self._persist()
        return number

    def deposit(self, account_number: str, amount: float, remark: str = "") -> bool:
        """Credit ``amount`` and record a DEPOSIT. Returns whether it was saved."""
        account = self.get_account(account_number)
        account.deposit(amount)
        self._record(account_number, TransactionType.DEPOSIT, amount, remark)
        logger.debug(
            "Deposited %s into %s",
            amount,
            account_number,
            extra={"account_number": account_number, "amount": amount},
        )
        return self._persist()

    def withdraw(self, account_number: str, amount: float, remark: str = "") -> WithdrawResult:
        """Debit ``amount`` if the account rules allow it.

        A withdrawal larger than ``fraud_threshold`` of the current balance
        sets ``fraud_warning`` but is not blocked. A refused withdrawal
        leaves no transaction and triggers no save.
        """
        account = self.get_account(account_number)
        context = {"account_number": account_number, "amount": amount}
        fraud_warning = amount > account.balance * self.policy.fraud_threshold
        if fraud_warning:
            logger.warning(
                "Possible fraud: withdrawal of %s from %s exceeds %.0f%% of balance %s",
                amount,
                account_number,
                self.policy.fraud_threshold * 100,
                account.balance,
                extra=context,
            )

        failure = account.try_withdraw(amount)
        if failure is not None:
            logger.warning(
                "Withdrawal of %s from %s refused: %s",
                amount,
                account_number,
                failure.value,
                extra={**context, "failure": failure.value},
            )
            return WithdrawResult(failure=failure, fraud_warning=fraud_warning)

        self._record(account_number, TransactionType.WITHDRAW, amount, remark)
        logger.debug("Withdrew %s from %s", amount, account_number, extra=context)
        return WithdrawResult(fraud_warning=fraud_warning, persisted=self._persist())

    def apply_monthly_interest(self) -> int:
        """Run the monthly interest pass over every account.

        Interest is credited at most once per account per month. Every
        account still gets one INTEREST transaction per pass, whose amount
        is its post-interest balance, so a repeated pass in the same month
        adds records but leaves balances unchanged. The ledger is saved
        once, after the pass.

        Returns
        -------
        int
            Number of accounts credited by this pass.
        """
        now = self.clock()
        year_month = now.strftime("%Y-%m")
        credited = 0
        for account in self.accounts.values():
            if account.apply_monthly_interest(self.policy.interest_rate, year_month):
                credited += 1
            self._record(
                account.account_number,
                TransactionType.INTEREST,
                account.balance,
                f"Interest {year_month}",
                now=now,
            )
        logger.info(
            "Applied %s interest to %d of %d accounts",
            year_month,
            credited,
            len(self.accounts),
            extra={"year_month": year_month},
        )
        self._persist()
        return credited

    # Read-only projections

    def get_account(self, account_number: str) -> Account:
        try:
            return self.accounts[account_number]
        except KeyError:
            raise AccountNotFoundError(f"Account {account_number} not found") from None

    def list_accounts(self) -> list[AccountSummary]:
        return [
            AccountSummary(a.account_number, a.customer_name, a.balance)
            for a in self.accounts.values()
        ]

    def balance_of(self, account_number: str) -> float:
        return self.get_account(account_number).balance

    def history_of(self, account_number: str) -> list[Transaction]:
        """Transactions of one account, oldest first."""
        self.get_account(account_number)
        return [t for t in self.history if t.account_number == account_number]

    # Internals

    def _next_account_number(self) -> str:
        # Derived from the live count; skipped records can leave the slot taken.
        n = len(self.accounts) + 1
        while f"{ACCOUNT_PREFIX}{n}" in self.accounts:
            n += 1
        return f"{ACCOUNT_PREFIX}{n}"

    def _record(
        self,
        account_number: str,
        transaction_type: TransactionType,
        amount: float,
        remark: str,
        now: datetime | None = None,
    ) -> None:
        self._warn_reserved(account_number, "Remark", remark)
        self.history.append(
            Transaction.create(
                account_number,
                transaction_type,
                amount,
                remark=remark,
                now=now if now is not None else self.clock(),
            )
        )

    def _warn_reserved(self, account_number: str, label: str, text: str) -> None:
        found = reserved_characters(text)
        if found:
            logger.warning(
                "%s %r contains %s and will not survive a reload",
                label,
                text,
                ", ".join(repr(c) for c in found),
                extra={"account_number": account_number},
            )

    def _persist(self) -> bool:
        try:
            self.store.save(self.accounts.values(), self.history)
        except StorageError as exc:
            logger.error("Ledger not saved, in-memory state kept: %s", exc, exc_info=exc)
            self.last_save_error = exc
            return False
        self.last_save_error = None
        return True
