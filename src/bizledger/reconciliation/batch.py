#!/usr/bin/env python3
"""
Reconciliation Batches

A batch groups expenses and invoices that reconcile against each other as a
whole. Expenses enter negated and invoices with their signed amount, so a
batch is balanced when its items sum to zero.
"""

import logging

from ..core.currency import format_cents
from ..core.money import Money
from .models import BatchItem

logger = logging.getLogger(__name__)


class ReconciliationBatch:
    """Mutable collection of batch items with a balance check."""

    def __init__(
        self,
        items: list[BatchItem] | None = None,
        description: str = "",
        tolerance_cents: int = 1,
    ):
        self.description = description
        self.tolerance_cents = tolerance_cents
        self._items: list[BatchItem] = []
        for item in items or []:
            self.add_item(item)

    @property
    def items(self) -> list[BatchItem]:
        return list(self._items)

    def add_item(self, item: BatchItem) -> bool:
        """
        Add an item unless one with the same id and type is already present.

        Returns:
            True if the item was added
        """
        if any(i.id == item.id and i.item_type == item.item_type for i in self._items):
            logger.debug("Skipping duplicate batch item %s %s", item.item_type, item.id)
            return False
        self._items.append(item)
        return True

    def remove_item(self, item_id: str, item_type: str) -> bool:
        """Remove an item by id and type. Returns True if something was removed."""
        before = len(self._items)
        self._items = [i for i in self._items if not (i.id == item_id and i.item_type == item_type)]
        return len(self._items) != before

    @property
    def total(self) -> Money:
        return sum((item.amount for item in self._items), Money.zero())

    @property
    def is_balanced(self) -> bool:
        """True when the items net to zero (strictly within tolerance)."""
        return abs(self.total.to_cents()) < self.tolerance_cents

    def validate(self) -> list[str]:
        """Validate the batch and return list of errors."""
        errors = []

        if not self._items:
            errors.append("Batch must contain at least one item")
        elif not self.is_balanced:
            errors.append(f"Batch must be balanced (total = 0), got {format_cents(self.total.to_cents())}")

        currencies = {item.currency for item in self._items}
        if len(currencies) > 1:
            errors.append(f"Batch mixes currencies: {', '.join(sorted(currencies))}")

        return errors
