"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import datetime
from decimal import Decimal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from repairshop.core.clock import as_local_naive
from repairshop.core.services.inventory_engine import MAX_LINE_QUANTITY

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# --- Catalog ---


class CategoryRequest(BaseModel):
    """Create or rename a category."""

    name: str = Field(..., min_length=1, max_length=100, description="Category name")


class UnitRequest(BaseModel):
    """Create or rename a unit of measure."""

    name: str = Field(..., min_length=1, max_length=100, description="Unit name")


class ProductRequest(BaseModel):
    """Create or update a product's descriptive fields.

    Stock quantity and average cost are not accepted here; they only change
    through purchases, sales and repairs.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    sale_price: Decimal = Field(..., ge=0, description="Selling price per unit")
    category_id: int = Field(..., description="Category ID")
    unit_id: int = Field(..., description="Unit of measure ID")


# --- Customers ---


class CustomerRequest(BaseModel):
    """Create or update a customer."""

    name: str = Field(..., min_length=1, max_length=100, description="Customer name")
    phone: str | None = Field(default=None, description="Phone number")
    address: str | None = Field(default=None, description="Postal address")

    @field_validator("phone", "address")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return v or None


# --- Stock movements ---


class CreatePurchaseRequest(BaseModel):
    """Receive stock for a product."""

    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., gt=0, le=MAX_LINE_QUANTITY, description="Units received")
    cost_per_unit: Decimal = Field(..., ge=0, description="Price paid per unit")
    purchase_date: datetime | None = Field(
        default=None,
        description="When the stock arrived (defaults to now)",
    )

    @field_validator("purchase_date")
    @classmethod
    def to_local_time(cls, v: datetime | None) -> datetime | None:
        return as_local_naive(v) if v else v


class StockLineRequest(BaseModel):
    """A product and quantity taken from stock."""

    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., gt=0, le=MAX_LINE_QUANTITY, description="Units taken")


class CreateSaleRequest(BaseModel):
    """Sell one or more products to a customer."""

    customer_id: int = Field(..., description="Customer ID")
    items: list[StockLineRequest] = Field(..., min_length=1, description="Sale lines")
    sale_date: datetime | None = Field(
        default=None,
        description="Sale timestamp (defaults to now)",
    )

    @field_validator("sale_date")
    @classmethod
    def to_local_time(cls, v: datetime | None) -> datetime | None:
        return as_local_naive(v) if v else v


class CreateRepairRequest(BaseModel):
    """Record a repair job and the parts it consumed."""

    customer_id: int = Field(..., description="Customer ID")
    description: str = Field(..., min_length=1, description="Job description")
    total_cost: Decimal = Field(..., gt=0, description="Price charged to the customer")
    used_parts: list[StockLineRequest] = Field(
        ..., min_length=1, description="Parts consumed"
    )


# --- Settings ---


class BusinessProfileRequest(BaseModel):
    """Create or update the shop's business profile."""

    shop_name: str = Field(..., min_length=1, max_length=100)
    address: str | None = Field(default=None, max_length=200)
    phone_number: str | None = Field(default=None, max_length=20)
    contact_email: str | None = Field(default=None, max_length=100, pattern=_EMAIL_PATTERN)
    logo_url: str | None = Field(default=None, max_length=500)
    low_stock_threshold: int | None = Field(
        default=None,
        ge=0,
        le=999,
        description="Alert when stock falls below this (keeps the current value if omitted)",
    )

    @field_validator("address", "phone_number", "contact_email", "logo_url", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("logo_url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Invalid URL format")
        return v
