#!/usr/bin/env python3
"""
Money Primitive Type

Immutable amount wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe amount operations.

Money carries no currency of its own: the currency belongs to the record
(expense, invoice, forecast) the amount came from.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .currency import amount_to_cents, cents_to_decimal, format_cents


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Supports both positive (inflows, invoices) and negative (credit notes,
    over-applied remainders) amounts.

    Examples:
        >>> total = Money.from_amount(400) - Money.from_amount("100")
        >>> str(total)
        '$300.00'
        >>> (-total).to_cents()
        -30000
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def zero(cls) -> "Money":
        """Zero amount."""
        return cls(cents=0)

    @classmethod
    def from_amount(cls, value: Any) -> "Money":
        """
        Create Money from a decimal amount as found in source records.

        Accepts int, float, Decimal and numeric strings; None and blank
        strings become zero.

        Raises:
            ValueError: If the value cannot be parsed
        """
        return cls(cents=amount_to_cents(value))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value as a two-place Decimal."""
        return cents_to_decimal(self.cents)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def is_zero(self) -> bool:
        return self.cents == 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __neg__(self) -> "Money":
        return Money(cents=-self.cents)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents == other.cents

    def __hash__(self) -> int:
        return hash(self.cents)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as "$1,234.56" with the sign in front."""
        return format_cents(self.cents)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(cents={self.cents})"
