"""Helpers for consistent user-facing date and money formatting."""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from app.core.dates import format_local_date, parse_local_date
from app.core.money import round_money, to_decimal


def format_iso_date(value: Any) -> str | None:
    """Format a value as YYYY-MM-DD, or None when it is not a date."""
    parsed = parse_local_date(value)
    return format_local_date(parsed) if parsed is not None else None


def format_money(value: Any, currency: str | None = None) -> str:
    """Format with thousand separators and two decimals, optionally prefixed."""
    amount: Decimal = round_money(to_decimal(value))
    text = f"{amount:,.2f}"
    return f"{currency} {text}" if currency else text


def money_to_float(value: Any) -> float:
    """Cent-rounded float for JSON and spreadsheet output."""
    return float(round_money(to_decimal(value)))


__all__ = [
    "format_iso_date",
    "format_money",
    "money_to_float",
]
