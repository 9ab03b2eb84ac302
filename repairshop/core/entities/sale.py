"""Sale domain entities."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


class SaleItem(BaseModel):
    """A sale line. Price and cost are snapshots taken at the moment of sale."""

    id: int | None = None
    sale_id: int | None = None
    product_id: int
    quantity: int
    price_at_time: Decimal  # product.sale_price when sold
    cost_at_time: Decimal  # product.average_cost when sold
    product_name: str | None = None  # denormalized on read

    @property
    def line_revenue(self) -> Decimal:
        return self.price_at_time * self.quantity

    @property
    def line_cost(self) -> Decimal:
        return self.cost_at_time * self.quantity


class Sale(BaseModel):
    """A completed sale. Gross profit is derived, never stored."""

    id: int | None = None
    customer_id: int
    customer_name: str | None = None  # denormalized on read
    total_amount: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")
    items: list[SaleItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def compute_totals(self) -> "Sale":
        """Derive totals from the line snapshots when lines are loaded."""
        if self.items:
            self.total_amount = sum((i.line_revenue for i in self.items), Decimal("0"))
            self.total_cost = sum((i.line_cost for i in self.items), Decimal("0"))
        return self

    @property
    def gross_profit(self) -> Decimal:
        return self.total_amount - self.total_cost
