"""Decimal helpers for currency values."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str | None) -> Decimal:
    """Coerce a number (or its string form) to Decimal without binary float noise.

    Floats go through ``str`` so 5.99 becomes Decimal("5.99"), not
    Decimal(5.9900000000000002131628...).
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a decimal value: {value!r}") from e


def quantize_money(value: Decimal) -> Decimal:
    """Round to cents for display (reports, summaries). Never used for stored costs."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal, symbol: str = "") -> str:
    """Format as ``1,234.50`` with an optional currency symbol prefix."""
    text = f"{quantize_money(value):,.2f}"
    return f"{symbol}{text}" if symbol else text
