#!/usr/bin/env python3
"""Unit tests for reconciliation batches."""

import pytest

from bizledger.core.money import Money
from bizledger.reconciliation import BatchItem, Expense, Invoice, ReconciliationBatch


def expense_item(item_id, amount, currency="MXN") -> BatchItem:
    return BatchItem.from_expense(Expense(id=item_id, amount=Money.from_amount(amount), currency=currency))


def invoice_item(item_id, amount, invoice_type="I", currency="MXN") -> BatchItem:
    inv = Invoice(
        id=item_id, total_amount=Money.from_amount(amount), invoice_type=invoice_type, currency=currency
    )
    return BatchItem.from_invoice(inv)


@pytest.mark.reconciliation
class TestReconciliationBatch:
    def test_balanced_batch(self):
        batch = ReconciliationBatch(
            items=[expense_item("e1", 1000), invoice_item("i1", 1200), invoice_item("i2", 200, "E")]
        )

        assert batch.total.is_zero()
        assert batch.is_balanced
        assert batch.validate() == []

    def test_unbalanced_batch(self):
        batch = ReconciliationBatch(items=[expense_item("e1", 1000), invoice_item("i1", 900)])

        assert batch.total == Money.from_amount(-100)
        assert not batch.is_balanced
        assert batch.validate() == ["Batch must be balanced (total = 0), got -$100.00"]

    def test_empty_batch(self):
        batch = ReconciliationBatch()

        assert batch.items == []
        assert batch.validate() == ["Batch must contain at least one item"]

    def test_duplicates_are_skipped(self):
        batch = ReconciliationBatch()

        assert batch.add_item(expense_item("x", 10))
        assert not batch.add_item(expense_item("x", 10))
        # Same id with a different type is a different item
        assert batch.add_item(invoice_item("x", 10))
        assert len(batch.items) == 2

    def test_remove_item(self):
        batch = ReconciliationBatch(items=[expense_item("e1", 10), invoice_item("i1", 10)])

        assert batch.remove_item("i1", "invoice")
        assert not batch.remove_item("i1", "invoice")
        assert [i.id for i in batch.items] == ["e1"]

    def test_items_returns_copy(self):
        batch = ReconciliationBatch(items=[expense_item("e1", 10)])

        batch.items.clear()

        assert len(batch.items) == 1

    def test_tolerance_is_strict(self):
        items = [expense_item("e1", "10.00"), invoice_item("i1", "10.01")]

        assert not ReconciliationBatch(items=items, tolerance_cents=1).is_balanced
        assert ReconciliationBatch(items=items, tolerance_cents=2).is_balanced

    def test_mixed_currencies_reported(self):
        batch = ReconciliationBatch(items=[expense_item("e1", 10), invoice_item("i1", 10, currency="USD")])

        assert batch.is_balanced
        assert batch.validate() == ["Batch mixes currencies: MXN, USD"]


@pytest.mark.reconciliation
class TestBatchItem:
    def test_expense_enters_negated(self):
        item = expense_item("e1", 250)

        assert item.item_type == "expense"
        assert item.amount == Money.from_amount(-250)

    def test_invoice_description(self):
        item = BatchItem.from_invoice(
            Invoice(id="i1", total_amount=Money.from_amount(5), issuer_name="ACME", invoice_number="F-9")
        )
        unnamed = BatchItem.from_invoice(Invoice(id="i2", total_amount=Money.from_amount(5)))

        assert item.description == "ACME - F-9"
        assert unnamed.description == "Unknown issuer - No number"
        assert unnamed.currency == "MXN"

    def test_credit_note_enters_negated(self):
        assert invoice_item("i1", 75, "E").amount == Money.from_amount(-75)
