"""
Dependency injection container for FastAPI.

Provides store, service and use case instances to route handlers. Tests
swap any of these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from repairshop.application.services import get_dashboard_service, get_inventory_engine
from repairshop.application.use_cases import (
    CreateRepairUseCase,
    CreateSaleUseCase,
    GenerateMonthlyReportUseCase,
    GetCustomerHistoryUseCase,
    ManageProductsUseCase,
    RecordPurchaseUseCase,
    SaveBusinessProfileUseCase,
)
from repairshop.config import Settings, get_settings
from repairshop.core.services import DashboardService
from repairshop.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    SQLiteCustomerStore,
    SQLitePurchaseStore,
    SQLiteRepairStore,
    SQLiteSalesStore,
    SQLiteSettingsStore,
    get_catalog_store,
    get_customer_store,
    get_purchase_store,
    get_repair_store,
    get_sales_store,
    get_settings_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_catalog() -> SQLiteCatalogStore:
    """Get catalog store."""
    return await get_catalog_store()


async def get_customers() -> SQLiteCustomerStore:
    """Get customer store."""
    return await get_customer_store()


async def get_purchases() -> SQLitePurchaseStore:
    """Get purchase store."""
    return await get_purchase_store()


async def get_sales() -> SQLiteSalesStore:
    """Get sales store."""
    return await get_sales_store()


async def get_repairs() -> SQLiteRepairStore:
    """Get repair store."""
    return await get_repair_store()


async def get_business_settings() -> SQLiteSettingsStore:
    """Get business profile store."""
    return await get_settings_store()


# Service dependencies
async def get_dashboard() -> DashboardService:
    """Get dashboard service."""
    return await get_dashboard_service()


# Use case dependencies
def get_record_purchase_use_case() -> RecordPurchaseUseCase:
    """Get record purchase use case."""
    return RecordPurchaseUseCase(engine=get_inventory_engine())


def get_create_sale_use_case() -> CreateSaleUseCase:
    """Get create sale use case."""
    return CreateSaleUseCase(engine=get_inventory_engine())


def get_create_repair_use_case() -> CreateRepairUseCase:
    """Get create repair use case."""
    return CreateRepairUseCase(engine=get_inventory_engine())


def get_manage_products_use_case() -> ManageProductsUseCase:
    """Get manage products use case."""
    return ManageProductsUseCase()


def get_customer_history_use_case() -> GetCustomerHistoryUseCase:
    """Get customer history use case."""
    return GetCustomerHistoryUseCase()


def get_monthly_report_use_case() -> GenerateMonthlyReportUseCase:
    """Get monthly report use case."""
    return GenerateMonthlyReportUseCase()


def get_save_profile_use_case() -> SaveBusinessProfileUseCase:
    """Get save business profile use case."""
    return SaveBusinessProfileUseCase()
