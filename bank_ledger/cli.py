"""Command-line entry point and interactive menu for bank-ledger."""

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Callable

from bank_ledger.config import LOG_FORMATS, BankConfig
from bank_ledger.engine import BankEngine
from bank_ledger.exceptions import (
    AccountNotFoundError,
    ConfigurationError,
    SelectionOutOfRangeError,
    StorageError,
)
from bank_ledger.generators import DemoLedgerGenerator
from bank_ledger.logging import setup_logging
from bank_ledger.models import WithdrawFailure

logger = logging.getLogger(__name__)

FAILURE_MESSAGES = {
    WithdrawFailure.INVALID_AMOUNT: "Amount must be greater than zero.",
    WithdrawFailure.INSUFFICIENT_FUNDS: "Insufficient funds.",
    WithdrawFailure.DAILY_LIMIT_EXCEEDED: "Daily withdrawal limit exceeded.",
}

MENU = """
===== Bank Ledger =====
1. Create account
2. Deposit
3. Withdraw
4. Check balance
5. Transaction history
6. Apply monthly interest
7. List accounts
0. Exit"""


class BankShell:
    """Menu-driven front end. Parses all user text; the engine never does.

    Parameters
    ----------
    engine : BankEngine
        Loaded engine to drive.
    input_fn : Callable[[str], str]
        Prompt reader (``input`` by default).
    output_fn : Callable[[str], None]
        Line writer (``print`` by default).
    """

    def __init__(
        self,
        engine: BankEngine,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], None] | None = None,
    ) -> None:
        self.engine = engine
        self.input = input_fn or input
        self.output = output_fn or print
        self.actions: dict[str, Callable[[], None]] = {
            "1": self.create_account,
            "2": self.deposit,
            "3": self.withdraw,
            "4": self.show_balance,
            "5": self.show_history,
            "6": self.apply_interest,
            "7": self.list_accounts,
        }

    def run(self) -> None:
        """Loop until the user exits or input ends."""
        self._report_load()
        while True:
            self.output(MENU)
            try:
                choice = self.input("Choose an option: ").strip()
            except EOFError:
                break
            if choice == "0":
                break
            action = self.actions.get(choice)
            if action is None:
                self.output("Invalid option.")
                continue
            try:
                action()
            except EOFError:
                break
            except SelectionOutOfRangeError as exc:
                self.output(str(exc))
            except ValueError:
                self.output("Please enter a valid number.")
            except AccountNotFoundError as exc:
                self.output(str(exc))
        self.output("Goodbye.")

    def create_account(self) -> None:
        name = self.input("Customer name: ").strip()
        if not name:
            self.output("Name cannot be empty.")
            return
        number = self.engine.create_account(name)
        self._done(f"Account created: {number}")

    def deposit(self) -> None:
        number = self.select_account()
        if number is None:
            return
        amount = self._read_amount("Amount to deposit: ")
        persisted = self.engine.deposit(number, amount)
        self._done(f"Deposited {amount}. New balance: {self.engine.balance_of(number)}", persisted)

    def withdraw(self) -> None:
        number = self.select_account()
        if number is None:
            return
        amount = self._read_amount("Amount to withdraw: ")
        result = self.engine.withdraw(number, amount)
        if result.fraud_warning:
            self.output("Warning: this withdrawal is unusually large for this account.")
        if not result.ok:
            self.output(FAILURE_MESSAGES[result.failure])
            return
        self._done(
            f"Withdrew {amount}. New balance: {self.engine.balance_of(number)}", result.persisted
        )

    def show_balance(self) -> None:
        number = self.select_account()
        if number is None:
            return
        self.output(f"Balance of {number}: {self.engine.balance_of(number)}")

    def show_history(self) -> None:
        number = self.select_account()
        if number is None:
            return
        history = self.engine.history_of(number)
        if not history:
            self.output("No transactions.")
        for transaction in history:
            self.output(transaction.display())

    def apply_interest(self) -> None:
        credited = self.engine.apply_monthly_interest()
        persisted = self.engine.last_save_error is None
        self._done(f"Interest applied to {credited} account(s).", persisted)

    def list_accounts(self) -> None:
        summaries = self.engine.list_accounts()
        if not summaries:
            self.output("No accounts.")
        for ordinal, summary in enumerate(summaries, start=1):
            self.output(
                f"{ordinal}. {summary.account_number} - {summary.customer_name} - {summary.balance}"
            )

    def select_account(self) -> str | None:
        """Show the account list and return the number picked by ordinal.

        Raises
        ------
        SelectionOutOfRangeError
            If the ordinal is not in the displayed list.
        ValueError
            If the reply is not an integer.
        """
        summaries = self.engine.list_accounts()
        if not summaries:
            self.output("No accounts. Create one first.")
            return None
        self.list_accounts()
        ordinal = int(self.input("Select account: "))
        if not 1 <= ordinal <= len(summaries):
            raise SelectionOutOfRangeError(
                f"Selection {ordinal} is out of range (1-{len(summaries)})."
            )
        return summaries[ordinal - 1].account_number

    def _read_amount(self, prompt: str) -> float:
        amount = float(self.input(prompt))
        if not math.isfinite(amount):
            raise ValueError(f"not a finite amount: {amount}")
        return amount

    def _done(self, message: str, persisted: bool = True) -> None:
        if persisted:
            self.output(message)
        else:
            self.output(f"{message} (not saved: {self.engine.last_save_error})")

    def _report_load(self) -> None:
        report = self.engine.load_report
        if report is None or report.clean:
            return
        self.output(f"{len(report.skipped)} unreadable record(s) were skipped:")
        for skipped in report.skipped:
            self.output(f"  {skipped.source}:{skipped.line_number} {skipped.reason}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bank-ledger", description="Bank accounts ledger")
    parser.add_argument("--data-dir", type=Path, help="Directory holding the ledger files")
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--log-format", choices=LOG_FORMATS, help="Log output format")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("shell", help="Interactive menu (default)")

    seed = subparsers.add_parser("seed", help="Populate the ledger with demo data")
    seed.add_argument("--accounts", type=int, default=5, help="Accounts to create (default: 5)")
    seed.add_argument(
        "--operations", type=int, default=5, help="Operations per account (default: 5)"
    )
    seed.add_argument("--seed", type=int, default=None, help="Random seed")
    seed.add_argument("--locale", default="en_US", help="Faker locale (default: en_US)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return a process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = BankConfig.from_env()
        if args.data_dir is not None:
            config.storage.data_dir = args.data_dir
        if args.log_level:
            config.log_level = args.log_level
        if args.log_format:
            config.log_format = args.log_format
        config.validate()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    setup_logging(config.log_level, config.log_format)

    try:
        engine = BankEngine.open(config)
    except StorageError as exc:
        logger.error("Cannot load ledger: %s", exc)
        return 1

    if args.command == "seed":
        generator = DemoLedgerGenerator(seed=args.seed, locale=args.locale)
        numbers = generator.populate(engine, args.accounts, args.operations)
        print(f"Created {len(numbers)} demo accounts in {config.storage.data_dir}")
        return 0 if engine.last_save_error is None else 1

    BankShell(engine).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
