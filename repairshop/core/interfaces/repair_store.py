"""Abstract interface for reading repairs."""

from abc import ABC, abstractmethod
from datetime import datetime

from repairshop.core.entities.repair import Repair


class IRepairStore(ABC):
    """Read-only access to repairs. Writes go through the stock ledger."""

    @abstractmethod
    async def get_repair(self, repair_id: int) -> Repair | None:
        """Get a repair with its used parts."""
        pass

    @abstractmethod
    async def list_repairs(
        self,
        customer_id: int | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = None,
    ) -> list[Repair]:
        """List repairs with used parts, newest first."""
        pass
