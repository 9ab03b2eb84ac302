"""Customer History Use Case: every sale and repair for one customer."""

from dataclasses import dataclass, field

from repairshop.application.dto.responses import (
    CustomerHistoryResponse,
    CustomerResponse,
    RepairResponse,
    SaleResponse,
)
from repairshop.core.entities.customer import Customer
from repairshop.core.entities.repair import Repair
from repairshop.core.entities.sale import Sale
from repairshop.core.exceptions import CustomerNotFoundError
from repairshop.core.interfaces.customer_store import ICustomerStore
from repairshop.core.interfaces.repair_store import IRepairStore
from repairshop.core.interfaces.sales_store import ISalesStore


@dataclass
class CustomerHistory:
    customer: Customer
    sales: list[Sale] = field(default_factory=list)
    repairs: list[Repair] = field(default_factory=list)


class GetCustomerHistoryUseCase:
    """Load a customer's sales (with items) and repairs (with parts), newest first."""

    def __init__(
        self,
        customer_store: ICustomerStore | None = None,
        sales_store: ISalesStore | None = None,
        repair_store: IRepairStore | None = None,
    ):
        self._customer_store = customer_store
        self._sales_store = sales_store
        self._repair_store = repair_store

    async def _get_stores(self) -> tuple[ICustomerStore, ISalesStore, IRepairStore]:
        from repairshop.infrastructure.storage.sqlite import (
            get_customer_store,
            get_repair_store,
            get_sales_store,
        )

        if self._customer_store is None:
            self._customer_store = await get_customer_store()
        if self._sales_store is None:
            self._sales_store = await get_sales_store()
        if self._repair_store is None:
            self._repair_store = await get_repair_store()
        return self._customer_store, self._sales_store, self._repair_store

    async def execute(self, customer_id: int) -> CustomerHistory:
        customers, sales, repairs = await self._get_stores()
        customer = await customers.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)

        return CustomerHistory(
            customer=customer,
            sales=await sales.list_sales(customer_id=customer_id),
            repairs=await repairs.list_repairs(customer_id=customer_id),
        )

    @staticmethod
    def to_response(history: CustomerHistory) -> CustomerHistoryResponse:
        return CustomerHistoryResponse(
            customer=CustomerResponse.from_entity(history.customer),
            sales=[SaleResponse.from_entity(s) for s in history.sales],
            repairs=[RepairResponse.from_entity(r) for r in history.repairs],
        )
