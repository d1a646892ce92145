"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def write_json_file(temp_dir):
    """Write a JSON payload into temp_dir and return its path."""

    def _write(name: str, payload: Any) -> Path:
        path = temp_dir / name
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_expense() -> dict[str, Any]:
    """Sample MXN expense record."""
    return {
        "id": "exp-1001",
        "description": "Pago proveedor papeleria",
        "amount": 1000,
        "currency": "MXN",
        "date": "2024-08-15",
    }


@pytest.fixture
def sample_usd_expense() -> dict[str, Any]:
    """Sample USD expense: ledger amount in MXN-equivalent, original in dollars."""
    return {
        "id": "exp-2001",
        "description": "Software subscription",
        "amount": 500,
        "original_amount": 480,
        "currency": "USD",
        "exchange_rate": "17.50",
        "date": "2024-08-20",
    }


@pytest.fixture
def sample_invoices() -> list[dict[str, Any]]:
    """One regular invoice and one credit note, both MXN."""
    return [
        {
            "id": "inv-1",
            "invoice_number": "A-100",
            "issuer_name": "Papeleria Central",
            "total_amount": 400,
            "invoice_type": "I",
            "currency": "MXN",
        },
        {
            "id": "inv-2",
            "invoice_number": "NC-7",
            "issuer_name": "Papeleria Central",
            "total_amount": 100,
            "invoice_type": "E",
            "currency": "MXN",
        },
    ]


@pytest.fixture
def sample_forecast_weeks() -> list[dict[str, Any]]:
    """Four forecast weeks; week 3 runs a deficit."""
    return [
        {
            "week_number": 1,
            "week_start_date": "2024-09-02",
            "predicted_inflows": 100,
            "predicted_outflows": 40,
        },
        {
            "week_number": 2,
            "week_start_date": "2024-09-09",
            "predicted_inflows": 50,
            "predicted_outflows": 80,
        },
        {
            "week_number": 3,
            "week_start_date": "2024-09-16",
            "predicted_inflows": 20,
            "predicted_outflows": 150,
        },
        {
            "week_number": 4,
            "week_start_date": "2024-09-23",
            "predicted_inflows": 200,
            "predicted_outflows": 60,
        },
    ]


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    # Ensure tests never write into a real data directory
    monkeypatch.setenv("BIZLEDGER_ENV", "test")
    monkeypatch.setenv("BIZLEDGER_DATA_DIR", str(Path(tempfile.gettempdir()) / "test_bizledger_data"))
    monkeypatch.setenv("DEFAULT_CURRENCY", "MXN")


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "reconciliation: Tests for expense/invoice reconciliation")
    config.addinivalue_line("markers", "forecast: Tests for cash-flow forecasting")
