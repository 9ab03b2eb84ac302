"""Create Repair Use Case: record a job, consume parts, derive labor."""

from repairshop.application.dto.requests import CreateRepairRequest
from repairshop.application.dto.responses import RepairResponse
from repairshop.config import get_logger
from repairshop.core.entities.repair import Repair
from repairshop.core.interfaces.repair_store import IRepairStore
from repairshop.core.interfaces.stock_ledger import IUnitOfWork
from repairshop.core.services.inventory_engine import InventoryEngine, StockLine

logger = get_logger(__name__)


class CreateRepairUseCase:
    """Record a repair and withdraw its parts at current average cost."""

    def __init__(
        self,
        unit_of_work: IUnitOfWork | None = None,
        repair_store: IRepairStore | None = None,
        engine: InventoryEngine | None = None,
    ):
        self._unit_of_work = unit_of_work
        self._repair_store = repair_store
        self._engine = engine or InventoryEngine()

    async def _get_unit_of_work(self) -> IUnitOfWork:
        if self._unit_of_work is None:
            from repairshop.infrastructure.storage.sqlite import get_unit_of_work

            self._unit_of_work = await get_unit_of_work()
        return self._unit_of_work

    async def _get_repair_store(self) -> IRepairStore:
        if self._repair_store is None:
            from repairshop.infrastructure.storage.sqlite import get_repair_store

            self._repair_store = await get_repair_store()
        return self._repair_store

    async def execute(self, request: CreateRepairRequest) -> Repair:
        logger.info(
            "create_repair_started",
            customer_id=request.customer_id,
            parts=len(request.used_parts),
        )

        lines = [StockLine(p.product_id, p.quantity) for p in request.used_parts]
        uow = await self._get_unit_of_work()
        async with uow.begin() as ledger:
            repair = await self._engine.consume_for_repair(
                ledger,
                customer_id=request.customer_id,
                description=request.description,
                total_cost=request.total_cost,
                lines=lines,
            )

        store = await self._get_repair_store()
        return await store.get_repair(repair.id) or repair

    @staticmethod
    def to_response(repair: Repair) -> RepairResponse:
        return RepairResponse.from_entity(repair)
