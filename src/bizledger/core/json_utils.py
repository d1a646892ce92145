#!/usr/bin/env python3
"""
JSON Utilities Module

Centralized JSON reading and writing with consistent formatting.
Reports and exported records are always pretty-printed so they stay
diffable and searchable.
"""

import json
from pathlib import Path
from typing import Any


def _default_serializer(value: Any) -> str:
    """Serialize non-JSON values as strings (Decimal keeps exact cents)."""
    return str(value)


def write_json(filepath: str | Path, data: Any, ensure_ascii: bool = False, sort_keys: bool = False) -> None:
    """
    Write data to a JSON file with standard pretty-printing.

    Parent directories are created as needed. Non-JSON values (Decimal,
    dates, paths) are written as strings.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(
            data,
            f,
            indent=2,
            ensure_ascii=ensure_ascii,
            sort_keys=sort_keys,
            default=_default_serializer,
        )


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"JSON file not found: {filepath}")

    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def format_json(data: Any, ensure_ascii: bool = False, sort_keys: bool = False) -> str:
    """Format data as a pretty-printed JSON string."""
    return json.dumps(
        data, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys, default=_default_serializer
    )
