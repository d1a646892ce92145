#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

Currency handling for ledger, invoice and forecast amounts.
All financial calculations use integer arithmetic to avoid floating-point errors.

Amount Representations:
- Source records (expenses, invoices, forecast weeks) carry decimal amounts
- Internal calculations use cents: 100 cents = 1.00
- Display uses strings with an ISO currency code: "$1,234.56 MXN"

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Convert decimals to cents once, at the boundary, with half-up rounding
- Records without a currency are assumed to be in the default currency (MXN)
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

DEFAULT_CURRENCY = "MXN"
USD = "USD"
MXN = "MXN"

_CENT = Decimal("0.01")


def normalize_currency(code: str | None, default: str = DEFAULT_CURRENCY) -> str:
    """
    Resolve a record's currency code.

    Unset and empty codes fall back to the default currency. Codes are
    otherwise returned verbatim, so "usd" and "USD" are different currencies.

    Example:
        normalize_currency(None) -> "MXN"
        normalize_currency("USD") -> "USD"
    """
    return code or default


def amount_to_cents(value: Any) -> int:
    """
    Convert a decimal amount to integer cents.

    Args:
        value: int, float, Decimal or numeric string (commas and "$" allowed).
               None and blank strings are treated as zero.

    Returns:
        Amount in cents, rounded half-up

    Raises:
        ValueError: If the value cannot be parsed as a number

    Examples:
        amount_to_cents(1000) -> 100000
        amount_to_cents("1,234.565") -> 123457
        amount_to_cents(None) -> 0
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")

    try:
        if isinstance(value, Decimal):
            decimal_amount = value
        elif isinstance(value, int):
            return value * 100
        elif isinstance(value, float):
            # str() keeps the shortest repr, so 0.1 stays 0.1
            decimal_amount = Decimal(str(value))
        else:
            clean = str(value).replace("$", "").replace(",", "").strip()
            if not clean:
                return 0
            decimal_amount = Decimal(clean)
        return int((decimal_amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e


def cents_to_decimal(cents: int) -> Decimal:
    """Convert cents to a two-place Decimal (4599 -> Decimal('45.99'))."""
    return (Decimal(cents) / 100).quantize(_CENT)


def cents_to_dollars_str(cents: int, thousands: bool = False) -> str:
    """
    Convert cents to a decimal string using pure integer arithmetic.

    Args:
        cents: Amount in cents
        thousands: Insert "," thousands separators

    Returns:
        Formatted string without currency symbol

    Example:
        cents_to_dollars_str(4599) -> "45.99"
        cents_to_dollars_str(-123456, thousands=True) -> "-1,234.56"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    dollars_str = f"{dollars:,}" if thousands else str(dollars)
    sign = "-" if is_negative else ""
    return f"{sign}{dollars_str}.{remainder:02d}"


def format_cents(cents: int) -> str:
    """Format cents as a string with "$" prefix and sign first ("-$45.99")."""
    if cents < 0:
        return f"-${cents_to_dollars_str(-cents, thousands=True)}"
    return f"${cents_to_dollars_str(cents, thousands=True)}"


def format_money(cents: int, currency: str | None = None) -> str:
    """
    Format cents with a currency code suffix.

    Example:
        format_money(123456, "USD") -> "$1,234.56 USD"
    """
    return f"{format_cents(cents)} {normalize_currency(currency)}"


def convert_cents(cents: int, from_currency: str, to_currency: str, exchange_rate: Any = 1) -> int:
    """
    Convert an amount between the ledger's supported currencies.

    The exchange rate is expressed as MXN per USD. USD amounts are multiplied
    by the rate to get MXN, MXN amounts are divided by it to get USD. Any
    other currency pair is returned unchanged.

    Args:
        cents: Amount in cents of from_currency
        from_currency: Source ISO code
        to_currency: Target ISO code
        exchange_rate: MXN per USD (Decimal, int, float or numeric string)

    Returns:
        Converted amount in cents, rounded half-up

    Raises:
        ValueError: If the exchange rate is not positive
    """
    if from_currency == to_currency:
        return cents

    rate = Decimal(str(exchange_rate if exchange_rate is not None else 1))
    if rate <= 0:
        raise ValueError(f"Exchange rate must be positive, got {exchange_rate!r}")

    if from_currency == USD and to_currency == MXN:
        converted = Decimal(cents) * rate
    elif from_currency == MXN and to_currency == USD:
        converted = Decimal(cents) / rate
    else:
        return cents

    return int(converted.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
