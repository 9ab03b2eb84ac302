"""Repair job domain entities."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class RepairUsedPart(BaseModel):
    """A part consumed by a repair, costed at the moment of consumption."""

    id: int | None = None
    repair_id: int | None = None
    product_id: int
    quantity: int
    cost_at_time: Decimal  # product.average_cost when consumed
    product_name: str | None = None  # denormalized on read

    @property
    def line_cost(self) -> Decimal:
        return self.cost_at_time * self.quantity


class Repair(BaseModel):
    """A repair job.

    ``total_cost`` is the price charged to the customer; ``labor_cost`` is
    whatever remains after parts and is allowed to go negative when a job is
    priced below its parts.
    """

    id: int | None = None
    customer_id: int
    customer_name: str | None = None  # denormalized on read
    description: str
    total_cost: Decimal
    parts_cost: Decimal = Decimal("0")
    labor_cost: Decimal = Decimal("0")
    used_parts: list[RepairUsedPart] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
