"""Column conversions shared by the SQLite stores."""

from datetime import datetime
from decimal import Decimal

from repairshop.core.exceptions import DatabaseError
from repairshop.core.money import to_decimal


def to_text(value: Decimal) -> str:
    """Serialize money for a TEXT column without exponent notation."""
    return format(to_decimal(value), "f")


def to_decimal_column(value: str | None) -> Decimal:
    return to_decimal(value)


def to_datetime(value: str | None) -> datetime:
    """Parse an ISO timestamp column; an empty value means a corrupt row."""
    if not value:
        raise DatabaseError("read", "timestamp column is empty")
    return datetime.fromisoformat(value)
