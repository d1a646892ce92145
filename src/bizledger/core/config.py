#!/usr/bin/env python3
"""
Configuration Management for bizledger

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .currency import DEFAULT_CURRENCY, amount_to_cents

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class ReconciliationConfig:
    """Expense/invoice reconciliation settings."""

    default_currency: str = DEFAULT_CURRENCY
    # An expense counts as exactly matched when |remaining| <= tolerance
    match_tolerance_cents: int = 1


@dataclass
class ForecastConfig:
    """Cash-flow forecast and chart settings."""

    output_dir: Path
    horizon_weeks: int = 13
    red_week_threshold_cents: int = 0
    chart_width: int = 12
    chart_height: int = 6
    chart_dpi: int = 150


@dataclass
class Config:
    """
    Main configuration class for bizledger.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    # Component configurations
    reconciliation: ReconciliationConfig
    forecast: ForecastConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("BIZLEDGER_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_bizledger"
            base_dir = Path(os.getenv("BIZLEDGER_DATA_DIR", str(default_test_dir)))
        else:
            base_dir = Path(os.getenv("BIZLEDGER_DATA_DIR", "./data")).expanduser().resolve()

        data_dir = base_dir
        output_dir = data_dir / "reports"

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        reconciliation = ReconciliationConfig(
            default_currency=os.getenv("DEFAULT_CURRENCY", DEFAULT_CURRENCY),
            match_tolerance_cents=int(os.getenv("MATCH_TOLERANCE_CENTS", "1")),
        )

        forecast = ForecastConfig(
            output_dir=data_dir / "cash_flow",
            horizon_weeks=int(os.getenv("FORECAST_WEEKS", "13")),
            red_week_threshold_cents=amount_to_cents(os.getenv("RED_WEEK_THRESHOLD", "0")),
            chart_width=int(os.getenv("CHART_WIDTH", "12")),
            chart_height=int(os.getenv("CHART_HEIGHT", "6")),
            chart_dpi=int(os.getenv("CHART_DPI", "150")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            reconciliation=reconciliation,
            forecast=forecast,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [
            ("data_dir", self.data_dir),
            ("output_dir", self.output_dir),
        ]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        currency = self.reconciliation.default_currency
        if len(currency) != 3 or not currency.isalpha() or not currency.isupper():
            errors.append(f"DEFAULT_CURRENCY must be a 3-letter ISO code: {currency!r}")

        if self.reconciliation.match_tolerance_cents < 0:
            errors.append("Match tolerance must be non-negative")
        if self.forecast.horizon_weeks <= 0:
            errors.append("Forecast horizon must be positive")
        if self.forecast.chart_width <= 0 or self.forecast.chart_height <= 0:
            errors.append("Chart dimensions must be positive")
        if self.forecast.chart_dpi <= 0:
            errors.append("Chart DPI must be positive")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # matplotlib is chatty at DEBUG
        logging.getLogger("matplotlib").setLevel(logging.WARNING)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    if isinstance(nested_value, Path):
                        nested_value = str(nested_value)
                    nested_dict[nested_name] = nested_value
                result[field_name] = nested_dict
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
