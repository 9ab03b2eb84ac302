"""Abstract interface for reading sales."""

from abc import ABC, abstractmethod
from datetime import datetime

from repairshop.core.entities.sale import Sale


class ISalesStore(ABC):
    """Read-only access to sales. Writes go through the stock ledger."""

    @abstractmethod
    async def get_sale(self, sale_id: int) -> Sale | None:
        """Get a sale with its items."""
        pass

    @abstractmethod
    async def list_sales(
        self,
        customer_id: int | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = None,
    ) -> list[Sale]:
        """List sales with items, newest first."""
        pass
