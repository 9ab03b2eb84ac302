"""Purchase (stock intake) domain entity."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class PurchaseRecord(BaseModel):
    """Immutable receipt of a stock intake. Never updated or deleted."""

    id: int | None = None
    product_id: int
    quantity: int  # always positive
    cost_per_unit: Decimal
    purchase_date: datetime = Field(default_factory=datetime.now)
    product_name: str | None = None  # denormalized on read

    @property
    def total_cost(self) -> Decimal:
        return self.quantity * self.cost_per_unit
