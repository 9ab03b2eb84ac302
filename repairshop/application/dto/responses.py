"""Response DTOs for API endpoints.

Pydantic v2 models that structure API responses. Money fields are Decimal
and serialize as strings, so no precision is lost on the wire.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from repairshop.core.entities import (
    BusinessProfile,
    Category,
    Customer,
    Product,
    PurchaseRecord,
    Repair,
    RepairUsedPart,
    Sale,
    SaleItem,
    Unit,
)

# --- Common ---


class ComponentHealthResponse(BaseModel):
    """Health of one dependency."""

    status: str
    latency_ms: float | None = None
    details: dict | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PRODUCT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


# --- Catalog ---


class CategoryResponse(BaseModel):
    id: int
    name: str
    product_count: int = 0
    created_at: datetime

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryResponse":
        return cls(
            id=category.id,
            name=category.name,
            product_count=category.product_count,
            created_at=category.created_at,
        )


class UnitResponse(BaseModel):
    id: int
    name: str
    created_at: datetime

    @classmethod
    def from_entity(cls, unit: Unit) -> "UnitResponse":
        return cls(id=unit.id, name=unit.name, created_at=unit.created_at)


class ProductResponse(BaseModel):
    """Product with its live stock position."""

    id: int
    name: str
    category_id: int
    category_name: str | None = None
    unit_id: int
    unit_name: str | None = None
    sale_price: Decimal
    quantity: int
    average_cost: Decimal
    stock_value: Decimal
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            category_id=product.category_id,
            category_name=product.category_name,
            unit_id=product.unit_id,
            unit_name=product.unit_name,
            sale_price=product.sale_price,
            quantity=product.quantity,
            average_cost=product.average_cost,
            stock_value=product.stock_value,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class StockValueResponse(BaseModel):
    """Total on-hand inventory value."""

    total_value: Decimal
    product_count: int


# --- Customers ---


class CustomerResponse(BaseModel):
    id: int
    name: str
    phone: str | None = None
    address: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, customer: Customer) -> "CustomerResponse":
        return cls(
            id=customer.id,
            name=customer.name,
            phone=customer.phone,
            address=customer.address,
            created_at=customer.created_at,
        )


# --- Purchases ---


class PurchaseResponse(BaseModel):
    id: int
    product_id: int
    product_name: str | None = None
    quantity: int
    cost_per_unit: Decimal
    total_cost: Decimal
    purchase_date: datetime

    @classmethod
    def from_entity(cls, record: PurchaseRecord) -> "PurchaseResponse":
        return cls(
            id=record.id,
            product_id=record.product_id,
            product_name=record.product_name,
            quantity=record.quantity,
            cost_per_unit=record.cost_per_unit,
            total_cost=record.total_cost,
            purchase_date=record.purchase_date,
        )


class RecordPurchaseResponse(BaseModel):
    """A new purchase record and the product's stock position after it."""

    purchase: PurchaseResponse
    product: ProductResponse


# --- Sales ---


class SaleItemResponse(BaseModel):
    id: int
    product_id: int
    product_name: str | None = None
    quantity: int
    price_at_time: Decimal
    cost_at_time: Decimal
    line_total: Decimal

    @classmethod
    def from_entity(cls, item: SaleItem) -> "SaleItemResponse":
        return cls(
            id=item.id,
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            price_at_time=item.price_at_time,
            cost_at_time=item.cost_at_time,
            line_total=item.line_revenue,
        )


class SaleResponse(BaseModel):
    id: int
    customer_id: int
    customer_name: str | None = None
    total_amount: Decimal
    total_cost: Decimal
    gross_profit: Decimal
    created_at: datetime
    items: list[SaleItemResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, sale: Sale) -> "SaleResponse":
        return cls(
            id=sale.id,
            customer_id=sale.customer_id,
            customer_name=sale.customer_name,
            total_amount=sale.total_amount,
            total_cost=sale.total_cost,
            gross_profit=sale.gross_profit,
            created_at=sale.created_at,
            items=[SaleItemResponse.from_entity(i) for i in sale.items],
        )


# --- Repairs ---


class UsedPartResponse(BaseModel):
    id: int
    product_id: int
    product_name: str | None = None
    quantity: int
    cost_at_time: Decimal
    line_cost: Decimal

    @classmethod
    def from_entity(cls, part: RepairUsedPart) -> "UsedPartResponse":
        return cls(
            id=part.id,
            product_id=part.product_id,
            product_name=part.product_name,
            quantity=part.quantity,
            cost_at_time=part.cost_at_time,
            line_cost=part.line_cost,
        )


class RepairResponse(BaseModel):
    id: int
    customer_id: int
    customer_name: str | None = None
    description: str
    total_cost: Decimal
    parts_cost: Decimal
    labor_cost: Decimal
    created_at: datetime
    used_parts: list[UsedPartResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, repair: Repair) -> "RepairResponse":
        return cls(
            id=repair.id,
            customer_id=repair.customer_id,
            customer_name=repair.customer_name,
            description=repair.description,
            total_cost=repair.total_cost,
            parts_cost=repair.parts_cost,
            labor_cost=repair.labor_cost,
            created_at=repair.created_at,
            used_parts=[UsedPartResponse.from_entity(p) for p in repair.used_parts],
        )


class RepairAnalyticsResponse(BaseModel):
    total_repairs: int
    total_revenue: Decimal
    average_repair_cost: Decimal
    total_labor_revenue: Decimal
    total_parts_cost: Decimal


class CustomerHistoryResponse(BaseModel):
    """A customer with every sale and repair on record."""

    customer: CustomerResponse
    sales: list[SaleResponse] = Field(default_factory=list)
    repairs: list[RepairResponse] = Field(default_factory=list)


# --- Dashboard ---


class DashboardSummaryResponse(BaseModel):
    period: str
    total_expenses: Decimal
    total_sales_income: Decimal
    total_repair_income: Decimal
    sales_profit: Decimal
    repair_profit: Decimal
    total_stock_value: Decimal
    gross_profit: Decimal


class TrendPointResponse(BaseModel):
    date: date
    total_income: Decimal
    total_expenses: Decimal


class TrendResponse(BaseModel):
    trend_data: list[TrendPointResponse]


class TopProductResponse(BaseModel):
    product_id: int
    product_name: str
    total_sales: int
    total_revenue: Decimal


class TopProductsResponse(BaseModel):
    top_products: list[TopProductResponse]


class ActivityResponse(BaseModel):
    id: str
    type: str
    description: str
    amount: Decimal
    customer_name: str | None = None
    date: datetime


class RecentActivitiesResponse(BaseModel):
    activities: list[ActivityResponse]


class LowStockProductResponse(BaseModel):
    id: int
    name: str
    current_stock: int
    category: str | None = None
    unit: str | None = None


class LowStockAlertsResponse(BaseModel):
    threshold: int
    low_stock_products: list[LowStockProductResponse]


# --- Settings ---


class BusinessProfileResponse(BaseModel):
    id: int
    shop_name: str
    address: str | None = None
    phone_number: str | None = None
    contact_email: str | None = None
    logo_url: str | None = None
    low_stock_threshold: int
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: BusinessProfile) -> "BusinessProfileResponse":
        return cls(
            id=profile.id,
            shop_name=profile.shop_name,
            address=profile.address,
            phone_number=profile.phone_number,
            contact_email=profile.contact_email,
            logo_url=profile.logo_url,
            low_stock_threshold=profile.low_stock_threshold,
            updated_at=profile.updated_at,
        )
