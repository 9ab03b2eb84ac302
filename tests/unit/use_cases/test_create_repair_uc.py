"""Tests for CreateRepairUseCase."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from repairshop.application.dto.requests import CreateRepairRequest, StockLineRequest
from repairshop.application.use_cases.create_repair import CreateRepairUseCase
from repairshop.core.entities import Repair, RepairUsedPart
from repairshop.core.services import InventoryEngine, StockLine


@pytest.fixture
def engine():
    return AsyncMock(spec=InventoryEngine)


@pytest.fixture
def repair_store():
    return AsyncMock()


def _repair() -> Repair:
    return Repair(
        id=8,
        customer_id=1,
        description="Replace screen",
        total_cost=Decimal("200"),
        parts_cost=Decimal("80"),
        labor_cost=Decimal("120"),
        used_parts=[
            RepairUsedPart(id=1, repair_id=8, product_id=3, quantity=2, cost_at_time=Decimal("40"))
        ],
    )


class TestCreateRepairUseCase:
    async def test_consumes_parts(self, unit_of_work, ledger, engine, repair_store):
        engine.consume_for_repair.return_value = _repair()
        repair_store.get_repair.return_value = None
        use_case = CreateRepairUseCase(
            unit_of_work=unit_of_work, repair_store=repair_store, engine=engine
        )

        repair = await use_case.execute(
            CreateRepairRequest(
                customer_id=1,
                description="Replace screen",
                total_cost=Decimal("200"),
                used_parts=[StockLineRequest(product_id=3, quantity=2)],
            )
        )

        engine.consume_for_repair.assert_awaited_once_with(
            ledger,
            customer_id=1,
            description="Replace screen",
            total_cost=Decimal("200"),
            lines=[StockLine(3, 2)],
        )
        # Falls back to the engine's copy when the reload finds nothing
        assert repair.id == 8

    def test_to_response(self):
        response = CreateRepairUseCase.to_response(_repair())
        assert response.labor_cost == Decimal("120")
        assert response.used_parts[0].line_cost == Decimal("80")
