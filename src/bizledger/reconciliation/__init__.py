"""
Reconciliation Package

Matching of bank expenses against the invoices that support them.

Key Components:
- models: Expense, Invoice and result types
- matcher: Currency validation, selected/remaining totals, allocation plans
- batch: Mixed expense/invoice batches that must net to zero
- loader: JSON loading of expenses, invoices and batches

Matching Rules:
- Every invoice must be in the expense's currency (unset means MXN);
  one mismatch rejects the whole selection
- Credit notes (type E) reduce the selected total
- USD expenses compare against their original dollar amount
"""

from .batch import ReconciliationBatch
from .loader import load_batch_items, load_expense, load_invoices
from .matcher import ReconciliationMatcher, match
from .models import (
    BatchItem,
    Expense,
    Invoice,
    InvoiceAllocation,
    InvoiceType,
    MatchStatus,
    ReconciliationPlan,
    ReconciliationResult,
)

__all__ = [
    "BatchItem",
    "Expense",
    "Invoice",
    "InvoiceAllocation",
    "InvoiceType",
    "MatchStatus",
    "ReconciliationBatch",
    "ReconciliationMatcher",
    "ReconciliationPlan",
    "ReconciliationResult",
    "load_batch_items",
    "load_expense",
    "load_invoices",
    "match",
]
