"""
Abstract interface for the transactional stock ledger.

The inventory engine never talks to a connection or a store directly. Each
business operation opens one unit of work and receives an ``IStockLedger``
bound to that single write transaction; everything done through it commits
together when the block exits cleanly and is rolled back otherwise.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from decimal import Decimal

from repairshop.core.entities.catalog import Product
from repairshop.core.entities.purchase import PurchaseRecord
from repairshop.core.entities.repair import Repair
from repairshop.core.entities.sale import Sale


class IStockLedger(ABC):
    """Reads and writes available inside one inventory transaction."""

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        """Load one product with its current stock state."""
        pass

    @abstractmethod
    async def get_products(self, product_ids: list[int]) -> dict[int, Product]:
        """Load several products in one query, keyed by id. Missing ids are absent."""
        pass

    @abstractmethod
    async def customer_exists(self, customer_id: int) -> bool:
        """Check a customer reference."""
        pass

    @abstractmethod
    async def add_purchase(self, record: PurchaseRecord) -> PurchaseRecord:
        """Append a purchase record."""
        pass

    @abstractmethod
    async def set_stock(
        self, product_id: int, quantity: int, average_cost: Decimal
    ) -> None:
        """Overwrite a product's quantity and average cost."""
        pass

    @abstractmethod
    async def withdraw_stock(self, product_id: int, quantity: int) -> bool:
        """Decrement quantity only if enough is on hand.

        Returns False (and changes nothing) when the guard fails.
        """
        pass

    @abstractmethod
    async def add_sale(self, sale: Sale) -> Sale:
        """Insert a sale with its line items."""
        pass

    @abstractmethod
    async def add_repair(self, repair: Repair) -> Repair:
        """Insert a repair with its used parts."""
        pass


class IUnitOfWork(ABC):
    """Factory for serialized, all-or-nothing inventory transactions."""

    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[IStockLedger]:
        """Open a write transaction and yield a ledger bound to it."""
        pass
