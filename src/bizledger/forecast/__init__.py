"""
Cash-Flow Forecast Package

Weekly cash-flow projections: net and cumulative flow, balances,
summary statistics and red-week flagging.

Key Components:
- models: ForecastWeek and derived summary types
- aggregator: Prefix-sum aggregation in week_number order, summaries,
  red weeks and DataFrame conversion
- chart: matplotlib rendering of an aggregated forecast
- loader: JSON loading of forecast weeks
"""

from .aggregator import CashFlowAggregator, aggregate, weeks_to_dataframe
from .chart import ChartConfig, ForecastChart
from .loader import load_forecast_weeks
from .models import ForecastSummary, ForecastWeek, RedWeek, RedWeekDriver

__all__ = [
    "CashFlowAggregator",
    "ChartConfig",
    "ForecastChart",
    "ForecastSummary",
    "ForecastWeek",
    "RedWeek",
    "RedWeekDriver",
    "aggregate",
    "load_forecast_weeks",
    "weeks_to_dataframe",
]
