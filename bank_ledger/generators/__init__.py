"""Demo data generators."""

from bank_ledger.generators.demo import DemoLedgerGenerator

__all__ = ["DemoLedgerGenerator"]
