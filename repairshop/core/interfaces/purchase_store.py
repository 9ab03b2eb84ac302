"""Abstract interface for reading purchase history."""

from abc import ABC, abstractmethod
from datetime import datetime

from repairshop.core.entities.purchase import PurchaseRecord


class IPurchaseStore(ABC):
    """Read-only access to purchase records. Writes go through the stock ledger."""

    @abstractmethod
    async def list_purchases(
        self,
        product_id: int | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = None,
    ) -> list[PurchaseRecord]:
        """List purchases, newest purchase_date first."""
        pass
