"""
bizledger - Reconciliation and Cash-Flow Core

Computational core of a small-business ledger: matching bank expenses
against their invoices and projecting weekly cash flow.

Domain Packages:
- core: Currency handling, Money/FinancialDate primitives, configuration
- reconciliation: Expense/invoice matching, allocation plans, batches
- forecast: Weekly cash-flow aggregation, summaries, red weeks, charts
- cli: Command-line interface

Example Usage:
    from bizledger.reconciliation import Expense, Invoice, match
    from bizledger.forecast import ForecastWeek, aggregate
"""

__version__ = "0.1.0"
__author__ = "bizledger contributors"

from .core.config import Environment, get_config
from .core.money import Money
from .forecast import ForecastWeek, aggregate
from .reconciliation import Expense, Invoice, ReconciliationResult, match

__all__ = [
    "Environment",
    "Expense",
    "ForecastWeek",
    "Invoice",
    "Money",
    "ReconciliationResult",
    "aggregate",
    "get_config",
    "match",
]
