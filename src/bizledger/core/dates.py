#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper used for expense, invoice and forecast-week dates.
"""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True, order=True)
class FinancialDate:
    """Immutable financial date wrapper with ISO formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Timestamps such as "2024-08-15T10:30:00Z" are accepted in the default
        format by keeping only the date part.
        """
        if format == "%Y-%m-%d" and len(date_str) > 10:
            date_str = date_str[:10]
        return cls(date=datetime.strptime(date_str, format).date())

    @classmethod
    def parse_optional(cls, value: str | None) -> "FinancialDate | None":
        """Parse an optional ISO date field from a source record."""
        if not value:
            return None
        if not isinstance(value, str):
            raise ValueError(f"Expected an ISO date string, got {value!r}")
        return cls.from_string(value)

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def __str__(self) -> str:
        return self.to_iso_string()

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"
