"""Abstract interface for customer storage."""

from abc import ABC, abstractmethod

from repairshop.core.entities.customer import Customer


class ICustomerStore(ABC):
    """Interface for customer persistence."""

    @abstractmethod
    async def list_customers(self) -> list[Customer]:
        """List customers, most recent first."""
        pass

    @abstractmethod
    async def get_customer(self, customer_id: int) -> Customer | None:
        pass

    @abstractmethod
    async def create_customer(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def update_customer(self, customer: Customer) -> Customer:
        """Update name/phone/address. Raises CustomerNotFoundError."""
        pass
