"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for stock-moving API handlers.
"""

from repairshop.application.services import (
    get_dashboard_service,
    get_inventory_engine,
    reset_services,
)
from repairshop.application.use_cases import (
    CreateRepairUseCase,
    CreateSaleUseCase,
    GenerateMonthlyReportUseCase,
    GetCustomerHistoryUseCase,
    ManageProductsUseCase,
    RecordPurchaseUseCase,
    SaveBusinessProfileUseCase,
)

__all__ = [
    # Use Cases
    "CreateRepairUseCase",
    "CreateSaleUseCase",
    "GenerateMonthlyReportUseCase",
    "GetCustomerHistoryUseCase",
    "ManageProductsUseCase",
    "RecordPurchaseUseCase",
    "SaveBusinessProfileUseCase",
    # Service factories
    "get_dashboard_service",
    "get_inventory_engine",
    "reset_services",
]
