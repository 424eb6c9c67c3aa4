"""Decimal helpers for currency amounts."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

MONEY_QUANT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Coerce a numeric field to Decimal, treating missing or bad values as zero."""

    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    return ZERO if result.is_nan() else result


def round_money(value: Decimal) -> Decimal:
    """Round half up to cents."""

    return value.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


__all__ = ["MONEY_QUANT", "ZERO", "round_money", "to_decimal"]
