#!/usr/bin/env python3
"""
Cash-Flow Aggregation Module

Derives net and cumulative cash flow for the weeks of a forecast, plus
summary statistics and red-week flagging on top of the aggregated weeks.

Cumulative cash flow is a prefix sum, so week order matters: weeks are
always accumulated in ascending week_number order.
"""

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import replace

import numpy as np
import pandas as pd
from scipy import stats

from ..core.money import Money
from .models import ForecastSummary, ForecastWeek, RedWeek, RedWeekDriver


class CashFlowAggregator:
    """Stateless aggregator over forecast weeks."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def aggregate(
        self, weeks: Sequence[ForecastWeek], initial_balance: Money | None = None
    ) -> list[ForecastWeek]:
        """
        Attach net and cumulative cash flow to each week.

        Args:
            weeks: Forecast weeks, expected in ascending week_number order
            initial_balance: Opening balance; when given, each week also gets
                             starting_balance and ending_balance

        Returns:
            New list of weeks in ascending week_number order. Input weeks are
            not modified.
        """
        ordered = self._ordered(weeks)

        cumulative = Money.zero()
        aggregated = []
        for week in ordered:
            net = week.predicted_inflows - week.predicted_outflows
            previous = cumulative
            cumulative = cumulative + net

            balances = {}
            if initial_balance is not None:
                balances = {
                    "starting_balance": initial_balance + previous,
                    "ending_balance": initial_balance + cumulative,
                }

            aggregated.append(replace(week, net_cash_flow=net, cumulative_cash_flow=cumulative, **balances))

        return aggregated

    def _ordered(self, weeks: Sequence[ForecastWeek]) -> list[ForecastWeek]:
        """Stable sort by week_number, logging anything that looks off."""
        numbers = [w.week_number for w in weeks]

        duplicates = sorted(n for n, count in Counter(numbers).items() if count > 1)
        if duplicates:
            self.logger.warning("Forecast has duplicate week numbers: %s", duplicates)

        if any(a > b for a, b in zip(numbers, numbers[1:])):
            self.logger.warning(
                "Forecast weeks were out of order; sorting by week_number before accumulating"
            )
            return sorted(weeks, key=lambda w: w.week_number)

        return list(weeks)

    def summarize(
        self, weeks: Sequence[ForecastWeek], initial_balance: Money | None = None
    ) -> ForecastSummary:
        """
        Summarize a forecast.

        Args:
            weeks: Forecast weeks (aggregated or not)
            initial_balance: Opening balance (default: zero)

        Returns:
            ForecastSummary with totals, ending/lowest balance and net-flow trend
        """
        initial = initial_balance or Money.zero()
        aggregated = self.aggregate(weeks, initial_balance=initial)

        total_inflows = sum((w.predicted_inflows for w in aggregated), Money.zero())
        total_outflows = sum((w.predicted_outflows for w in aggregated), Money.zero())
        net_change = total_inflows - total_outflows

        lowest_balance = initial
        lowest_week = None
        for week in aggregated:
            if lowest_week is None or week.ending_balance < lowest_balance:
                lowest_balance = week.ending_balance
                lowest_week = week.week_number

        slope, r_value = self._net_flow_trend(aggregated)

        return ForecastSummary(
            week_count=len(aggregated),
            initial_balance=initial,
            total_inflows=total_inflows,
            total_outflows=total_outflows,
            net_change=net_change,
            ending_balance=initial + net_change,
            lowest_balance=lowest_balance,
            lowest_balance_week=lowest_week,
            weekly_trend=slope,
            trend_confidence=abs(r_value),
        )

    def _net_flow_trend(self, aggregated: list[ForecastWeek]) -> tuple[float, float]:
        """Linear trend of weekly net cash flow (slope per week, r)."""
        if len(aggregated) < 2:
            return 0.0, 0.0

        x = np.array([w.week_number for w in aggregated], dtype=float)
        y = np.array([w.net_cash_flow.to_cents() / 100 for w in aggregated], dtype=float)
        if np.all(x == x[0]):
            return 0.0, 0.0

        result = stats.linregress(x, y)
        r_value = 0.0 if np.isnan(result.rvalue) else float(result.rvalue)
        return float(result.slope), r_value

    def find_red_weeks(
        self,
        weeks: Sequence[ForecastWeek],
        initial_balance: Money | None = None,
        threshold: Money | None = None,
    ) -> list[RedWeek]:
        """
        Flag weeks whose ending balance falls below a threshold.

        Each red week lists its largest drivers by absolute impact: an opening
        balance already under the threshold, and outflows exceeding inflows.
        """
        threshold = threshold or Money.zero()
        red_weeks = []

        for week in self.aggregate(weeks, initial_balance=initial_balance or Money.zero()):
            if week.ending_balance >= threshold:
                continue

            drivers = []
            if week.starting_balance < threshold:
                drivers.append(
                    RedWeekDriver(
                        type="low_opening_cash",
                        amount=week.starting_balance,
                        impact=week.starting_balance - threshold,
                    )
                )
            if week.predicted_outflows > week.predicted_inflows:
                drivers.append(
                    RedWeekDriver(
                        type="high_outflows",
                        amount=week.predicted_outflows,
                        impact=week.predicted_outflows - week.predicted_inflows,
                    )
                )
            drivers.sort(key=lambda d: d.impact.abs(), reverse=True)

            red_weeks.append(
                RedWeek(
                    week_number=week.week_number,
                    starting_balance=week.starting_balance,
                    ending_balance=week.ending_balance,
                    threshold=threshold,
                    inflows=week.predicted_inflows,
                    outflows=week.predicted_outflows,
                    drivers=drivers,
                )
            )

        if red_weeks:
            self.logger.info(
                "%d red week(s) below threshold: %s",
                len(red_weeks),
                [w.week_number for w in red_weeks],
            )
        return red_weeks


WEEK_COLUMNS = ["inflows", "outflows", "net_cash_flow", "cumulative_cash_flow", "ending_balance"]


def weeks_to_dataframe(weeks: Sequence[ForecastWeek]) -> pd.DataFrame:
    """
    Convert aggregated weeks to a DataFrame indexed by week_number.

    Amounts are floats in currency units (for charts and CSV export);
    ending_balance is NaN for weeks aggregated without an initial balance.
    """

    def units(value: Money | None) -> float:
        return value.to_cents() / 100 if value is not None else float("nan")

    rows = [
        {
            "week_number": w.week_number,
            "inflows": units(w.predicted_inflows),
            "outflows": units(w.predicted_outflows),
            "net_cash_flow": units(w.net_cash_flow),
            "cumulative_cash_flow": units(w.cumulative_cash_flow),
            "ending_balance": units(w.ending_balance),
        }
        for w in weeks
    ]

    df = pd.DataFrame(rows, columns=["week_number", *WEEK_COLUMNS])
    df.set_index("week_number", inplace=True)
    return df


def aggregate(weeks: Sequence[ForecastWeek]) -> list[ForecastWeek]:
    """Aggregate forecast weeks with default settings."""
    return CashFlowAggregator().aggregate(weeks)
