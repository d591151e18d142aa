"""Populate a ledger with plausible demo accounts and activity."""

from __future__ import annotations

import logging
import random
from typing import Iterator

from bank_ledger.engine import BankEngine
from bank_ledger.generators.base import BaseGenerator

logger = logging.getLogger(__name__)


class DemoLedgerGenerator(BaseGenerator):
    """Generate customer names and deposit/withdraw activity.

    Everything goes through the public engine API, so limits, the fraud
    heuristic and persistence apply exactly as for a real session.
    """

    OPENING_DEPOSIT_RANGE = (500, 25000)
    DEPOSIT_RANGE = (20, 5000)
    DEPOSIT_WEIGHT = 0.6
    REMARKS = ["Salary", "ATM", "Transfer", "Rent", "Groceries", "Refund", ""]

    def generate_names(self, count: int) -> Iterator[str]:
        """Yield ``count`` customer names."""
        for _ in range(count):
            yield self.fake.name()

    def populate(
        self,
        engine: BankEngine,
        num_accounts: int,
        operations_per_account: int = 5,
    ) -> list[str]:
        """Create accounts and run random operations against them.

        Parameters
        ----------
        engine : BankEngine
            Engine to drive.
        num_accounts : int
            Accounts to create.
        operations_per_account : int
            Deposits/withdrawals per account after the opening deposit.

        Returns
        -------
        list[str]
            Numbers of the created accounts.
        """
        numbers = []
        refused = 0
        for name in self.generate_names(num_accounts):
            number = engine.create_account(name)
            numbers.append(number)
            engine.deposit(number, self._amount(*self.OPENING_DEPOSIT_RANGE), "Opening deposit")

            for _ in range(operations_per_account):
                remark = random.choice(self.REMARKS)
                if random.random() < self.DEPOSIT_WEIGHT:
                    engine.deposit(number, self._amount(*self.DEPOSIT_RANGE), remark)
                else:
                    # up to the full balance, so some trip the fraud warning
                    upper = max(1, int(engine.balance_of(number)))
                    result = engine.withdraw(number, self._amount(1, upper), remark)
                    if not result.ok:
                        refused += 1

        logger.info(
            "Populated %d demo accounts (%d withdrawals refused)", len(numbers), refused
        )
        return numbers

    def _amount(self, low: int, high: int) -> float:
        return round(random.uniform(low, high), 2)
