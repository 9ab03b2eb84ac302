"""Domain entities."""

from repairshop.core.entities.business_profile import BusinessProfile
from repairshop.core.entities.catalog import Category, Product, Unit
from repairshop.core.entities.customer import Customer
from repairshop.core.entities.purchase import PurchaseRecord
from repairshop.core.entities.repair import Repair, RepairUsedPart
from repairshop.core.entities.sale import Sale, SaleItem

__all__ = [
    "BusinessProfile",
    "Category",
    "Customer",
    "Product",
    "PurchaseRecord",
    "Repair",
    "RepairUsedPart",
    "Sale",
    "SaleItem",
    "Unit",
]
