"""Storage infrastructure implementations."""

from repairshop.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    SQLiteCustomerStore,
    SQLitePurchaseStore,
    SQLiteRepairStore,
    SQLiteSalesStore,
    SQLiteSettingsStore,
    SQLiteUnitOfWork,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteCatalogStore",
    "SQLiteCustomerStore",
    "SQLitePurchaseStore",
    "SQLiteRepairStore",
    "SQLiteSalesStore",
    "SQLiteSettingsStore",
    "SQLiteUnitOfWork",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
