#!/usr/bin/env python3
"""
Forecast Data Loader

Loads forecast weeks exported as JSON, either as a bare list or as
{"weeks": [...]}.
"""

from pathlib import Path
from typing import Any

from ..core.json_utils import read_json
from .models import ForecastWeek


def load_forecast_weeks(path: str | Path) -> list[ForecastWeek]:
    """
    Load forecast weeks from a JSON file as domain models.

    Weeks are returned in file order; ordering is the aggregator's job.

    Raises:
        FileNotFoundError: If the file doesn't exist
        KeyError: If a week has no week_number
        ValueError: If the weeks are not a list of objects, or a week is malformed
    """
    data: Any = read_json(path)

    if isinstance(data, dict):
        records = data.get("weeks") or []
    elif isinstance(data, list):
        records = data
    else:
        records = []

    if not isinstance(records, list):
        raise ValueError(f"Expected a list of forecast weeks in {path}")

    weeks = []
    for record in records:
        if not isinstance(record, dict):
            raise ValueError(f"Expected a forecast week object, got {record!r}")
        weeks.append(ForecastWeek.from_dict(record))
    return weeks
