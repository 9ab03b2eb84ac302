"""Customer domain entity."""

from datetime import datetime

from pydantic import BaseModel, Field


class Customer(BaseModel):
    """A customer of the shop. Referenced by sales and repairs."""

    id: int | None = None
    name: str
    phone: str | None = None
    address: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
