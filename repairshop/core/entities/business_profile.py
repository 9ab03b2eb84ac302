"""Business profile (shop settings) entity."""

from datetime import datetime

from pydantic import BaseModel, Field

DEFAULT_LOW_STOCK_THRESHOLD = 5


class BusinessProfile(BaseModel):
    """Single-row shop profile used on reports and for low-stock alerts."""

    id: int | None = None
    shop_name: str
    address: str | None = None
    phone_number: str | None = None
    contact_email: str | None = None
    logo_url: str | None = None
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    updated_at: datetime = Field(default_factory=datetime.now)
