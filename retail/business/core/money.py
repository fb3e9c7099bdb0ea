"""Decimal helpers shared by the stock and invoice calculations."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

# Largest values the Numeric(12, 2) money and Numeric(12, 3) quantity columns hold
MAX_AMOUNT = Decimal("9999999999.99")
MAX_QUANTITY = Decimal("999999999.999")


def to_decimal(value, default: Decimal | None = ZERO) -> Decimal | None:
    """
    Convert a number-like value to Decimal.

    Floats go through ``str`` so 0.1 becomes Decimal('0.1') rather than its
    binary expansion. ``None`` and blank strings return ``default``.
    NaN and infinities raise ValueError.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise TypeError("booleans are not amounts")
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    try:
        result = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def quantize_money(value: Decimal) -> Decimal:
    """Round half-up to cents; raises ValueError when the value is too large to round."""
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Amount out of range: {value}") from e
