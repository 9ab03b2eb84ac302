"""Store and unit-of-work interfaces."""

from repairshop.core.interfaces.catalog_store import ICatalogStore
from repairshop.core.interfaces.customer_store import ICustomerStore
from repairshop.core.interfaces.purchase_store import IPurchaseStore
from repairshop.core.interfaces.repair_store import IRepairStore
from repairshop.core.interfaces.sales_store import ISalesStore
from repairshop.core.interfaces.settings_store import ISettingsStore
from repairshop.core.interfaces.stock_ledger import IStockLedger, IUnitOfWork

__all__ = [
    "ICatalogStore",
    "ICustomerStore",
    "IPurchaseStore",
    "IRepairStore",
    "ISalesStore",
    "ISettingsStore",
    "IStockLedger",
    "IUnitOfWork",
]
