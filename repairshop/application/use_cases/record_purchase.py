"""Record Purchase Use Case: receive stock and re-cost the product."""

from dataclasses import dataclass

from repairshop.application.dto.requests import CreatePurchaseRequest
from repairshop.application.dto.responses import (
    ProductResponse,
    PurchaseResponse,
    RecordPurchaseResponse,
)
from repairshop.config import get_logger
from repairshop.core.entities.catalog import Product
from repairshop.core.entities.purchase import PurchaseRecord
from repairshop.core.interfaces.stock_ledger import IUnitOfWork
from repairshop.core.services.inventory_engine import InventoryEngine

logger = get_logger(__name__)


@dataclass
class RecordPurchaseResult:
    """Result of recording a purchase."""

    record: PurchaseRecord
    product: Product


class RecordPurchaseUseCase:
    """Receive stock (purchase) with weighted-average cost recalculation."""

    def __init__(
        self,
        unit_of_work: IUnitOfWork | None = None,
        engine: InventoryEngine | None = None,
    ):
        self._unit_of_work = unit_of_work
        self._engine = engine or InventoryEngine()

    async def _get_unit_of_work(self) -> IUnitOfWork:
        if self._unit_of_work is None:
            from repairshop.infrastructure.storage.sqlite import get_unit_of_work

            self._unit_of_work = await get_unit_of_work()
        return self._unit_of_work

    async def execute(self, request: CreatePurchaseRequest) -> RecordPurchaseResult:
        """Record the purchase and update stock in one transaction."""
        logger.info(
            "record_purchase_started",
            product_id=request.product_id,
            quantity=request.quantity,
        )

        uow = await self._get_unit_of_work()
        async with uow.begin() as ledger:
            outcome = await self._engine.receive(
                ledger,
                product_id=request.product_id,
                quantity=request.quantity,
                cost_per_unit=request.cost_per_unit,
                purchase_date=request.purchase_date,
            )

        return RecordPurchaseResult(record=outcome.record, product=outcome.product)

    @staticmethod
    def to_response(result: RecordPurchaseResult) -> RecordPurchaseResponse:
        """Convert result to API response."""
        return RecordPurchaseResponse(
            purchase=PurchaseResponse.from_entity(result.record),
            product=ProductResponse.from_entity(result.product),
        )
