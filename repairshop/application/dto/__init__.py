"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from repairshop.application.dto.requests import (
    BusinessProfileRequest,
    CategoryRequest,
    CreatePurchaseRequest,
    CreateRepairRequest,
    CreateSaleRequest,
    CustomerRequest,
    ProductRequest,
    StockLineRequest,
    UnitRequest,
)
from repairshop.application.dto.responses import (
    ActivityResponse,
    BusinessProfileResponse,
    CategoryResponse,
    ComponentHealthResponse,
    CustomerHistoryResponse,
    CustomerResponse,
    DashboardSummaryResponse,
    ErrorResponse,
    HealthResponse,
    LowStockAlertsResponse,
    LowStockProductResponse,
    ProductResponse,
    PurchaseResponse,
    RecentActivitiesResponse,
    RecordPurchaseResponse,
    RepairAnalyticsResponse,
    RepairResponse,
    SaleItemResponse,
    SaleResponse,
    StockValueResponse,
    TopProductResponse,
    TopProductsResponse,
    TrendPointResponse,
    TrendResponse,
    UnitResponse,
    UsedPartResponse,
)

__all__ = [
    # Requests
    "BusinessProfileRequest",
    "CategoryRequest",
    "CreatePurchaseRequest",
    "CreateRepairRequest",
    "CreateSaleRequest",
    "CustomerRequest",
    "ProductRequest",
    "StockLineRequest",
    "UnitRequest",
    # Responses
    "ActivityResponse",
    "BusinessProfileResponse",
    "CategoryResponse",
    "ComponentHealthResponse",
    "CustomerHistoryResponse",
    "CustomerResponse",
    "DashboardSummaryResponse",
    "ErrorResponse",
    "HealthResponse",
    "LowStockAlertsResponse",
    "LowStockProductResponse",
    "ProductResponse",
    "PurchaseResponse",
    "RecentActivitiesResponse",
    "RecordPurchaseResponse",
    "RepairAnalyticsResponse",
    "RepairResponse",
    "SaleItemResponse",
    "SaleResponse",
    "StockValueResponse",
    "TopProductResponse",
    "TopProductsResponse",
    "TrendPointResponse",
    "TrendResponse",
    "UnitResponse",
    "UsedPartResponse",
]
