"""
Core Utilities Package

Shared primitives and utilities used by the reconciliation and forecast
packages.

This package provides:
- Currency handling with integer arithmetic for precision
- Money and FinancialDate value types
- Configuration management for environment-specific settings
- JSON reading/writing helpers
"""

from .config import (
    Config,
    Environment,
    ForecastConfig,
    ReconciliationConfig,
    get_config,
    reload_config,
)
from .currency import (
    DEFAULT_CURRENCY,
    amount_to_cents,
    cents_to_decimal,
    cents_to_dollars_str,
    convert_cents,
    format_cents,
    format_money,
    normalize_currency,
)
from .dates import FinancialDate
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "DEFAULT_CURRENCY",
    "Environment",
    "FinancialDate",
    "ForecastConfig",
    "Money",
    "ReconciliationConfig",
    # Currency utilities
    "amount_to_cents",
    "cents_to_decimal",
    "cents_to_dollars_str",
    "convert_cents",
    "format_cents",
    "format_money",
    "get_config",
    "normalize_currency",
    "reload_config",
]
