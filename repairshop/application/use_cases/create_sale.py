"""Create Sale Use Case: sell products, snapshot costs, deduct stock."""

from repairshop.application.dto.requests import CreateSaleRequest
from repairshop.application.dto.responses import SaleResponse
from repairshop.config import get_logger
from repairshop.core.entities.sale import Sale
from repairshop.core.interfaces.sales_store import ISalesStore
from repairshop.core.interfaces.stock_ledger import IUnitOfWork
from repairshop.core.services.inventory_engine import InventoryEngine, StockLine

logger = get_logger(__name__)


class CreateSaleUseCase:
    """
    Use case for selling products.

    Flow:
    1. Open a write transaction
    2. Engine checks products, stock and customer, then writes the sale
    3. Reload the committed sale with customer and product names
    """

    def __init__(
        self,
        unit_of_work: IUnitOfWork | None = None,
        sales_store: ISalesStore | None = None,
        engine: InventoryEngine | None = None,
    ):
        self._unit_of_work = unit_of_work
        self._sales_store = sales_store
        self._engine = engine or InventoryEngine()

    async def _get_unit_of_work(self) -> IUnitOfWork:
        if self._unit_of_work is None:
            from repairshop.infrastructure.storage.sqlite import get_unit_of_work

            self._unit_of_work = await get_unit_of_work()
        return self._unit_of_work

    async def _get_sales_store(self) -> ISalesStore:
        if self._sales_store is None:
            from repairshop.infrastructure.storage.sqlite import get_sales_store

            self._sales_store = await get_sales_store()
        return self._sales_store

    async def execute(self, request: CreateSaleRequest) -> Sale:
        """Create the sale. Raises before writing anything if any check fails."""
        logger.info(
            "create_sale_started",
            customer_id=request.customer_id,
            lines=len(request.items),
        )

        lines = [StockLine(i.product_id, i.quantity) for i in request.items]
        uow = await self._get_unit_of_work()
        async with uow.begin() as ledger:
            sale = await self._engine.sell(
                ledger, request.customer_id, lines, sale_date=request.sale_date
            )

        store = await self._get_sales_store()
        return await store.get_sale(sale.id) or sale

    @staticmethod
    def to_response(sale: Sale) -> SaleResponse:
        return SaleResponse.from_entity(sale)
