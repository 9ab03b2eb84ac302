"""SQLite storage implementations."""

from repairshop.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from repairshop.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    get_write_transaction,
)
from repairshop.infrastructure.storage.sqlite.customer_store import SQLiteCustomerStore
from repairshop.infrastructure.storage.sqlite.purchase_store import SQLitePurchaseStore
from repairshop.infrastructure.storage.sqlite.repair_store import SQLiteRepairStore
from repairshop.infrastructure.storage.sqlite.sales_store import SQLiteSalesStore
from repairshop.infrastructure.storage.sqlite.settings_store import SQLiteSettingsStore
from repairshop.infrastructure.storage.sqlite.stock_ledger import (
    SQLiteStockLedger,
    SQLiteUnitOfWork,
)

# Singleton instances
_catalog_store: SQLiteCatalogStore | None = None
_customer_store: SQLiteCustomerStore | None = None
_purchase_store: SQLitePurchaseStore | None = None
_sales_store: SQLiteSalesStore | None = None
_repair_store: SQLiteRepairStore | None = None
_settings_store: SQLiteSettingsStore | None = None
_unit_of_work: SQLiteUnitOfWork | None = None


async def get_catalog_store() -> SQLiteCatalogStore:
    """Get singleton catalog store instance."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SQLiteCatalogStore()
    return _catalog_store


async def get_customer_store() -> SQLiteCustomerStore:
    """Get singleton customer store instance."""
    global _customer_store
    if _customer_store is None:
        _customer_store = SQLiteCustomerStore()
    return _customer_store


async def get_purchase_store() -> SQLitePurchaseStore:
    """Get singleton purchase store instance."""
    global _purchase_store
    if _purchase_store is None:
        _purchase_store = SQLitePurchaseStore()
    return _purchase_store


async def get_sales_store() -> SQLiteSalesStore:
    """Get singleton sales store instance."""
    global _sales_store
    if _sales_store is None:
        _sales_store = SQLiteSalesStore()
    return _sales_store


async def get_repair_store() -> SQLiteRepairStore:
    """Get singleton repair store instance."""
    global _repair_store
    if _repair_store is None:
        _repair_store = SQLiteRepairStore()
    return _repair_store


async def get_settings_store() -> SQLiteSettingsStore:
    """Get singleton business profile store instance."""
    global _settings_store
    if _settings_store is None:
        _settings_store = SQLiteSettingsStore()
    return _settings_store


async def get_unit_of_work() -> SQLiteUnitOfWork:
    """Get singleton unit of work bound to the global pool."""
    global _unit_of_work
    if _unit_of_work is None:
        _unit_of_work = SQLiteUnitOfWork()
    return _unit_of_work


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "get_write_transaction",
    # Store classes
    "SQLiteCatalogStore",
    "SQLiteCustomerStore",
    "SQLitePurchaseStore",
    "SQLiteRepairStore",
    "SQLiteSalesStore",
    "SQLiteSettingsStore",
    "SQLiteStockLedger",
    "SQLiteUnitOfWork",
    # Factory functions
    "get_catalog_store",
    "get_customer_store",
    "get_purchase_store",
    "get_repair_store",
    "get_sales_store",
    "get_settings_store",
    "get_unit_of_work",
]
