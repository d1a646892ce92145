#!/usr/bin/env python3
"""
Reconciliation Data Loader

Utilities for loading expenses and invoices exported from the ledger
as JSON files.

Functions:
- load_expense: Load a single expense
- load_invoices: Load invoices as domain models
- load_batch_items: Load expenses and invoices as batch items
"""

from pathlib import Path
from typing import Any

from ..core.currency import DEFAULT_CURRENCY
from ..core.json_utils import read_json
from .models import BatchItem, Expense, Invoice


def _records(data: Any, key: str) -> list[dict[str, Any]]:
    """
    Accept both array format and object format ({key: [...]}).

    Raises:
        ValueError: If the records are not a list of objects
    """
    if isinstance(data, dict):
        records = data.get(key) or []
    elif isinstance(data, list):
        records = data
    else:
        return []

    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise ValueError(f"Expected a list of {key} objects")
    return records


def load_expense(path: str | Path) -> Expense:
    """
    Load a single expense from a JSON file.

    The file may hold the expense object itself or {"expense": {...}}.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file holds no expense object
    """
    data = read_json(path)
    if isinstance(data, dict) and isinstance(data.get("expense"), dict):
        data = data["expense"]
    if not isinstance(data, dict):
        raise ValueError(f"Expected an expense object in {path}")
    return Expense.from_dict(data)


def load_invoices(path: str | Path) -> list[Invoice]:
    """
    Load invoices from a JSON file as domain models.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    return [Invoice.from_dict(record) for record in _records(read_json(path), "invoices")]


def load_batch_items(path: str | Path, default_currency: str = DEFAULT_CURRENCY) -> list[BatchItem]:
    """
    Load a reconciliation batch file ({"expenses": [...], "invoices": [...]}).

    Expenses come first, then invoices, each in file order.
    """
    data = read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object with 'expenses' and 'invoices' in {path}")

    items = [
        BatchItem.from_expense(Expense.from_dict(record), default_currency)
        for record in _records(data, "expenses")
    ]
    items.extend(
        BatchItem.from_invoice(Invoice.from_dict(record), default_currency)
        for record in _records(data, "invoices")
    )
    return items
