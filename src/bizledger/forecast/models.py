#!/usr/bin/env python3
"""
Cash-Flow Forecast Domain Models

Weekly buckets of a cash-flow projection and the summaries derived from them.
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money


@dataclass(frozen=True)
class ForecastWeek:
    """
    One week of a cash-flow forecast.

    `net_cash_flow`, `cumulative_cash_flow` and the balances are derived;
    they stay None until the week has been through the aggregator.
    """

    week_number: int
    predicted_inflows: Money = field(default_factory=Money.zero)
    predicted_outflows: Money = field(default_factory=Money.zero)

    # Optional fields
    id: str | None = None
    forecast_id: str | None = None
    week_start_date: FinancialDate | None = None
    week_end_date: FinancialDate | None = None
    actual_inflows: Money | None = None
    actual_outflows: Money | None = None
    notes: str | None = None
    confidence_score: float | None = None

    # Derived
    net_cash_flow: Money | None = None
    cumulative_cash_flow: Money | None = None
    starting_balance: Money | None = None
    ending_balance: Money | None = None

    @property
    def label(self) -> str:
        return f"Week {self.week_number}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ForecastWeek":
        """
        Create ForecastWeek from a record dict.

        Missing inflows/outflows are zero. Derived fields in the record are
        ignored; they are always recomputed.

        Raises:
            KeyError: If week_number is missing
            ValueError: If week_number is not a positive integer
        """
        week_number = _parse_week_number(data["week_number"])

        actual_inflows = data.get("actual_inflows")
        actual_outflows = data.get("actual_outflows")
        confidence = data.get("confidence_score")

        return cls(
            week_number=week_number,
            predicted_inflows=Money.from_amount(data.get("predicted_inflows")),
            predicted_outflows=Money.from_amount(data.get("predicted_outflows")),
            id=str(data["id"]) if data.get("id") is not None else None,
            forecast_id=str(data["forecast_id"]) if data.get("forecast_id") is not None else None,
            week_start_date=FinancialDate.parse_optional(data.get("week_start_date")),
            week_end_date=FinancialDate.parse_optional(data.get("week_end_date")),
            actual_inflows=Money.from_amount(actual_inflows) if actual_inflows is not None else None,
            actual_outflows=Money.from_amount(actual_outflows) if actual_outflows is not None else None,
            notes=data.get("notes"),
            confidence_score=float(confidence) if confidence is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization (amounts as decimal strings)."""

        def amount(value: Money | None) -> str | None:
            return str(value.to_decimal()) if value is not None else None

        return {
            "id": self.id,
            "forecast_id": self.forecast_id,
            "week_number": self.week_number,
            "week_start_date": self.week_start_date.to_iso_string() if self.week_start_date else None,
            "week_end_date": self.week_end_date.to_iso_string() if self.week_end_date else None,
            "predicted_inflows": amount(self.predicted_inflows),
            "predicted_outflows": amount(self.predicted_outflows),
            "actual_inflows": amount(self.actual_inflows),
            "actual_outflows": amount(self.actual_outflows),
            "net_cash_flow": amount(self.net_cash_flow),
            "cumulative_cash_flow": amount(self.cumulative_cash_flow),
            "starting_balance": amount(self.starting_balance),
            "ending_balance": amount(self.ending_balance),
            "notes": self.notes,
            "confidence_score": self.confidence_score,
        }


def _parse_week_number(value: Any) -> int:
    """Accept ints and integer strings ("3"); anything else is a ValueError."""
    if isinstance(value, bool):
        raise ValueError(f"week_number must be an integer, got {value!r}")
    if isinstance(value, int):
        week_number = value
    elif isinstance(value, str) and value.strip().lstrip("+-").isdigit():
        week_number = int(value.strip())
    else:
        raise ValueError(f"week_number must be an integer, got {value!r}")

    if week_number <= 0:
        raise ValueError(f"week_number must be positive, got {week_number}")
    return week_number


@dataclass(frozen=True)
class ForecastSummary:
    """Totals and trend over an aggregated forecast."""

    week_count: int
    initial_balance: Money
    total_inflows: Money
    total_outflows: Money
    net_change: Money
    ending_balance: Money
    lowest_balance: Money
    lowest_balance_week: int | None
    weekly_trend: float  # Slope of net cash flow per week, in currency units
    trend_confidence: float  # |r| of the regression

    @property
    def trend_direction(self) -> str:
        if self.weekly_trend > 0:
            return "improving"
        if self.weekly_trend < 0:
            return "declining"
        return "flat"

    def to_dict(self) -> dict[str, Any]:
        return {
            "week_count": self.week_count,
            "initial_balance": str(self.initial_balance.to_decimal()),
            "total_inflows": str(self.total_inflows.to_decimal()),
            "total_outflows": str(self.total_outflows.to_decimal()),
            "net_change": str(self.net_change.to_decimal()),
            "ending_balance": str(self.ending_balance.to_decimal()),
            "lowest_balance": str(self.lowest_balance.to_decimal()),
            "lowest_balance_week": self.lowest_balance_week,
            "weekly_trend": self.weekly_trend,
            "trend_direction": self.trend_direction,
            "trend_confidence": self.trend_confidence,
        }


@dataclass(frozen=True)
class RedWeekDriver:
    """One cause behind a red week, with its impact in cents."""

    type: str  # "low_opening_cash" or "high_outflows"
    amount: Money
    impact: Money


@dataclass(frozen=True)
class RedWeek:
    """Forecast week whose ending balance falls below the threshold."""

    week_number: int
    starting_balance: Money
    ending_balance: Money
    threshold: Money
    inflows: Money
    outflows: Money
    drivers: list[RedWeekDriver] = field(default_factory=list)

    @property
    def shortfall(self) -> Money:
        return self.threshold - self.ending_balance

    def to_dict(self) -> dict[str, Any]:
        return {
            "week_number": self.week_number,
            "starting_balance": str(self.starting_balance.to_decimal()),
            "ending_balance": str(self.ending_balance.to_decimal()),
            "threshold": str(self.threshold.to_decimal()),
            "shortfall": str(self.shortfall.to_decimal()),
            "inflows": str(self.inflows.to_decimal()),
            "outflows": str(self.outflows.to_decimal()),
            "drivers": [
                {
                    "type": d.type,
                    "amount": str(d.amount.to_decimal()),
                    "impact": str(d.impact.to_decimal()),
                }
                for d in self.drivers
            ],
        }
