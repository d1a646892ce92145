#!/usr/bin/env python3
"""
Expense/Invoice Reconciliation Matching Module

Core logic for comparing one expense against the invoices selected to
reconcile it. All invoices must share the expense's currency; credit notes
(type E) reduce the selected total.
"""

import logging
from collections.abc import Sequence

from ..core.currency import DEFAULT_CURRENCY, format_money
from ..core.money import Money
from .models import (
    Expense,
    Invoice,
    InvoiceAllocation,
    MatchStatus,
    ReconciliationPlan,
    ReconciliationResult,
)


class ReconciliationMatcher:
    """Stateless expense-to-invoices matcher."""

    def __init__(
        self,
        default_currency: str = DEFAULT_CURRENCY,
        match_tolerance_cents: int = 1,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the matcher.

        Args:
            default_currency: Currency assumed for records without one
            match_tolerance_cents: |remaining| at or below this is an exact match
            logger: Logger to report through (defaults to this module's logger)
        """
        self.default_currency = default_currency
        self.match_tolerance_cents = match_tolerance_cents
        self.logger = logger or logging.getLogger(__name__)

    def match(self, expense: Expense | None, invoices: Sequence[Invoice]) -> ReconciliationResult:
        """
        Match an expense against candidate invoices.

        Args:
            expense: Expense being reconciled, or None when nothing is selected
            invoices: Invoices selected for the expense

        Returns:
            ReconciliationResult. A currency mismatch is reported through
            `error`/`error_currency` with zero amounts, never raised.
        """
        if expense is None:
            return ReconciliationResult(
                total_selected_amount=Money.zero(),
                remaining_amount=Money.zero(),
                currency=self.default_currency,
            )

        currency = expense.resolved_currency(self.default_currency)
        comparison_amount = expense.comparison_amount(self.default_currency)

        # Whole set is rejected on the first mismatch; nothing is summed
        for invoice in invoices:
            invoice_currency = invoice.resolved_currency(self.default_currency)
            if invoice_currency != currency:
                self.logger.warning(
                    "Invoice %s is in %s but expense %s is in %s",
                    invoice.label,
                    invoice_currency,
                    expense.id,
                    currency,
                )
                return ReconciliationResult(
                    total_selected_amount=Money.zero(),
                    remaining_amount=Money.zero(),
                    currency=currency,
                    error=True,
                    error_currency=invoice_currency,
                )

        total_selected = sum((invoice.signed_amount for invoice in invoices), Money.zero())
        remaining = comparison_amount - total_selected

        self.logger.debug(
            "Expense %s: %s selected across %d invoices, %s remaining",
            expense.id,
            format_money(total_selected.to_cents(), currency),
            len(invoices),
            format_money(remaining.to_cents(), currency),
        )

        return ReconciliationResult(
            total_selected_amount=total_selected,
            remaining_amount=remaining,
            currency=currency,
        )

    def classify(self, result: ReconciliationResult) -> MatchStatus:
        """
        Classify a match result.

        Returns:
            CURRENCY_MISMATCH on error, EXACT within tolerance, otherwise
            EXPENSE_EXCESS (remaining > 0) or INVOICE_EXCESS (remaining < 0)
        """
        if result.error:
            return MatchStatus.CURRENCY_MISMATCH

        remaining_cents = result.remaining_amount.to_cents()
        if abs(remaining_cents) <= self.match_tolerance_cents:
            return MatchStatus.EXACT
        if remaining_cents > 0:
            return MatchStatus.EXPENSE_EXCESS
        return MatchStatus.INVOICE_EXCESS

    def allocate(self, expense: Expense, invoices: Sequence[Invoice]) -> ReconciliationPlan:
        """
        Build the per-invoice allocations for reconciling an expense.

        Invoices are applied in the order given. Each invoice receives at most
        what is still unapplied of the expense; credit notes give amount back.

        Args:
            expense: Expense being reconciled
            invoices: Invoices in selection order

        Returns:
            ReconciliationPlan; on currency mismatch it holds the error result
            and no allocations.
        """
        result = self.match(expense, invoices)
        status = self.classify(result)

        if result.error:
            return ReconciliationPlan(result=result, status=status)

        remaining = expense.comparison_amount(self.default_currency)
        allocations = []

        for invoice in invoices:
            applied = min(remaining, invoice.total_amount)
            if invoice.is_credit_note:
                applied = -applied

            reconciled = applied.abs()
            new_paid = invoice.paid_amount + reconciled
            allocations.append(
                InvoiceAllocation(
                    invoice=invoice,
                    applied_amount=applied,
                    reconciled_amount=reconciled,
                    new_paid_amount=new_paid,
                    fully_paid=new_paid.abs() >= invoice.total_amount.abs(),
                )
            )
            remaining = remaining - applied

            self.logger.debug(
                "Allocated %s to invoice %s, %s left on expense",
                format_money(applied.to_cents(), result.currency),
                invoice.label,
                format_money(remaining.to_cents(), result.currency),
            )

        return ReconciliationPlan(
            result=result,
            status=status,
            allocations=allocations,
            unapplied_amount=remaining,
        )


def match(expense: Expense | None, invoices: Sequence[Invoice]) -> ReconciliationResult:
    """Match an expense against invoices with default settings."""
    return ReconciliationMatcher().match(expense, invoices)
