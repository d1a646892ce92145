#!/usr/bin/env python3
"""
Reconciliation Domain Models

Type-safe models for expenses, invoices and the results of matching them.
Amounts use the Money primitive; currencies stay on the record.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from ..core.currency import DEFAULT_CURRENCY, USD, convert_cents, normalize_currency
from ..core.dates import FinancialDate
from ..core.money import Money


class InvoiceType(Enum):
    """CFDI invoice type codes."""

    INGRESO = "I"  # Regular sale/purchase invoice
    EGRESO = "E"  # Credit note, offsets a prior invoice
    PAGO = "P"  # Payment complement
    NOMINA = "N"  # Payroll
    TRASLADO = "T"  # Transfer of goods


class MatchStatus(Enum):
    """Outcome of comparing an expense against its selected invoices."""

    EXACT = "exact"
    EXPENSE_EXCESS = "expense_excess"  # Expense not fully covered by invoices
    INVOICE_EXCESS = "invoice_excess"  # Invoices exceed the expense (over-applied)
    CURRENCY_MISMATCH = "currency_mismatch"


@dataclass
class Expense:
    """
    Recorded outgoing payment in the ledger.

    `amount` is in the ledger currency. USD expenses also carry
    `original_amount`, the amount actually paid in dollars.
    """

    amount: Money = field(default_factory=Money.zero)
    original_amount: Money | None = None
    currency: str | None = None

    # Optional fields
    id: str | None = None
    description: str | None = None
    exchange_rate: Decimal = Decimal("1")
    date: FinancialDate | None = None

    def resolved_currency(self, default: str = DEFAULT_CURRENCY) -> str:
        """Currency with the default applied."""
        return normalize_currency(self.currency, default)

    def comparison_amount(self, default_currency: str = DEFAULT_CURRENCY) -> Money:
        """
        Amount invoices are compared against.

        USD expenses compare in dollars (`original_amount`); every other
        currency uses the ledger amount directly.
        """
        if self.resolved_currency(default_currency) == USD:
            return self.original_amount or Money.zero()
        return self.amount

    def converted_amount(self, to_currency: str, default_currency: str = DEFAULT_CURRENCY) -> Money:
        """Comparison amount converted with the expense's exchange rate."""
        cents = convert_cents(
            self.comparison_amount(default_currency).to_cents(),
            self.resolved_currency(default_currency),
            to_currency,
            self.exchange_rate,
        )
        return Money.from_cents(cents)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        """
        Create Expense from a record dict.

        Missing amounts are treated as zero; a missing original_amount stays
        None so it can be told apart from an explicit zero.
        """
        original = data.get("original_amount")
        return cls(
            amount=Money.from_amount(data.get("amount")),
            original_amount=Money.from_amount(original) if original is not None else None,
            currency=data.get("currency"),
            id=str(data["id"]) if data.get("id") is not None else None,
            description=data.get("description"),
            exchange_rate=_parse_exchange_rate(data.get("exchange_rate")),
            date=FinancialDate.parse_optional(data.get("date")),
        )


def _parse_exchange_rate(value: Any) -> Decimal:
    """
    Parse an exchange rate (MXN per USD); missing or blank means 1.

    Raises:
        ValueError: If the rate is not a number or is not positive
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return Decimal("1")
    if isinstance(value, bool):
        raise ValueError(f"Invalid exchange rate: {value!r}")

    try:
        rate = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid exchange rate: {value!r}") from e

    if not rate.is_finite():
        raise ValueError(f"Invalid exchange rate: {value!r}")
    if rate <= 0:
        raise ValueError(f"Exchange rate must be positive, got {value!r}")
    return rate


@dataclass
class Invoice:
    """
    Tax document that can be reconciled against an expense.

    `total_amount` is always positive; credit notes (type E) are negated
    when summed.
    """

    total_amount: Money = field(default_factory=Money.zero)
    invoice_type: str = InvoiceType.INGRESO.value
    currency: str | None = None

    # Optional fields
    id: str | None = None
    invoice_number: str | None = None
    issuer_name: str | None = None
    paid_amount: Money = field(default_factory=Money.zero)
    invoice_date: FinancialDate | None = None

    @property
    def is_credit_note(self) -> bool:
        """True for egress (E) invoices."""
        return self.invoice_type == InvoiceType.EGRESO.value

    @property
    def signed_amount(self) -> Money:
        """Total amount with credit notes negated."""
        return -self.total_amount if self.is_credit_note else self.total_amount

    def resolved_currency(self, default: str = DEFAULT_CURRENCY) -> str:
        """Currency with the default applied."""
        return normalize_currency(self.currency, default)

    @property
    def label(self) -> str:
        """Short human-readable identifier for logs and CLI output."""
        return self.invoice_number or self.id or "<unnumbered>"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Invoice":
        """Create Invoice from a record dict."""
        return cls(
            total_amount=Money.from_amount(data.get("total_amount")),
            invoice_type=data.get("invoice_type") or InvoiceType.INGRESO.value,
            currency=data.get("currency"),
            id=str(data["id"]) if data.get("id") is not None else None,
            invoice_number=data.get("invoice_number"),
            issuer_name=data.get("issuer_name"),
            paid_amount=Money.from_amount(data.get("paid_amount")),
            invoice_date=FinancialDate.parse_optional(data.get("invoice_date")),
        )


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Result of matching one expense against a set of invoices.

    On a currency mismatch `error` is True, `error_currency` names the first
    offending invoice currency and both amounts are zero.
    """

    total_selected_amount: Money
    remaining_amount: Money
    currency: str
    error: bool = False
    error_currency: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "total_selected_amount": str(self.total_selected_amount.to_decimal()),
            "remaining_amount": str(self.remaining_amount.to_decimal()),
            "currency": self.currency,
            "error": self.error,
            "error_currency": self.error_currency,
        }


@dataclass(frozen=True)
class InvoiceAllocation:
    """Portion of an expense applied to one invoice."""

    invoice: Invoice
    applied_amount: Money  # Signed: negative for credit notes
    reconciled_amount: Money  # Absolute amount recorded against the invoice
    new_paid_amount: Money
    fully_paid: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "invoice_id": self.invoice.id,
            "invoice_number": self.invoice.invoice_number,
            "invoice_type": self.invoice.invoice_type,
            "applied_amount": str(self.applied_amount.to_decimal()),
            "reconciled_amount": str(self.reconciled_amount.to_decimal()),
            "new_paid_amount": str(self.new_paid_amount.to_decimal()),
            "fully_paid": self.fully_paid,
        }


@dataclass(frozen=True)
class ReconciliationPlan:
    """Match result plus the per-invoice allocations that would be recorded."""

    result: ReconciliationResult
    status: MatchStatus
    allocations: list[InvoiceAllocation] = field(default_factory=list)
    unapplied_amount: Money = field(default_factory=Money.zero)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.result.to_dict(),
            "status": self.status.value,
            "unapplied_amount": str(self.unapplied_amount.to_decimal()),
            "allocations": [a.to_dict() for a in self.allocations],
        }


@dataclass(frozen=True)
class BatchItem:
    """
    Expense or invoice entry in a reconciliation batch.

    Expenses enter negated; invoices enter with their signed amount, so a
    batch that reconciles cleanly sums to zero.
    """

    id: str
    item_type: str  # "expense" or "invoice"
    description: str
    amount: Money
    currency: str = DEFAULT_CURRENCY

    @classmethod
    def from_expense(cls, expense: Expense, default_currency: str = DEFAULT_CURRENCY) -> "BatchItem":
        return cls(
            id=expense.id or "",
            item_type="expense",
            description=expense.description or "",
            amount=-expense.amount,
            currency=expense.resolved_currency(default_currency),
        )

    @classmethod
    def from_invoice(cls, invoice: Invoice, default_currency: str = DEFAULT_CURRENCY) -> "BatchItem":
        issuer = invoice.issuer_name or "Unknown issuer"
        return cls(
            id=invoice.id or "",
            item_type="invoice",
            description=f"{issuer} - {invoice.invoice_number or 'No number'}",
            amount=invoice.signed_amount,
            currency=invoice.resolved_currency(default_currency),
        )
