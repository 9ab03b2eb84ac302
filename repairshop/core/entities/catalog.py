"""Catalog domain entities: categories, units of measure, products."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class Category(BaseModel):
    """Product category (e.g. "Phone Parts")."""

    id: int | None = None
    name: str
    product_count: int = 0  # populated by list queries only
    created_at: datetime = Field(default_factory=datetime.now)


class Unit(BaseModel):
    """Unit of measure (piece, set, pack)."""

    id: int | None = None
    name: str
    created_at: datetime = Field(default_factory=datetime.now)


class Product(BaseModel):
    """A stocked item.

    ``quantity`` and ``average_cost`` are maintained exclusively by the
    inventory engine; catalog edits only touch name, price, category and unit.
    """

    id: int | None = None
    name: str
    category_id: int
    unit_id: int
    sale_price: Decimal = Decimal("0")
    quantity: int = 0
    average_cost: Decimal = Decimal("0")  # weighted average cost, full precision
    category_name: str | None = None  # denormalized on read
    unit_name: str | None = None  # denormalized on read
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def stock_value(self) -> Decimal:
        """On-hand value = quantity * average_cost."""
        return self.quantity * self.average_cost
