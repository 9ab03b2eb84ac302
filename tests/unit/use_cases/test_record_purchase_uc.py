"""Tests for RecordPurchaseUseCase."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from repairshop.application.dto.requests import CreatePurchaseRequest
from repairshop.application.use_cases.record_purchase import RecordPurchaseUseCase
from repairshop.core.entities import Product, PurchaseRecord
from repairshop.core.exceptions import ProductNotFoundError
from repairshop.core.services import InventoryEngine, ReceiptOutcome


@pytest.fixture
def engine():
    return AsyncMock(spec=InventoryEngine)


@pytest.fixture
def use_case(unit_of_work, engine):
    return RecordPurchaseUseCase(unit_of_work=unit_of_work, engine=engine)


def _outcome() -> ReceiptOutcome:
    now = datetime.now()
    return ReceiptOutcome(
        record=PurchaseRecord(
            id=1, product_id=3, quantity=10, cost_per_unit=Decimal("5.99"),
            purchase_date=now, product_name="Screen",
        ),
        product=Product(
            id=3, name="Screen", category_id=1, unit_id=1,
            sale_price=Decimal("120"), quantity=10, average_cost=Decimal("5.99"),
        ),
    )


class TestRecordPurchaseUseCase:
    async def test_runs_engine_inside_transaction(self, use_case, unit_of_work, ledger, engine):
        engine.receive.return_value = _outcome()

        request = CreatePurchaseRequest(product_id=3, quantity=10, cost_per_unit=Decimal("5.99"))
        result = await use_case.execute(request)

        assert unit_of_work.entered == 1
        engine.receive.assert_awaited_once_with(
            ledger,
            product_id=3,
            quantity=10,
            cost_per_unit=Decimal("5.99"),
            purchase_date=None,
        )
        assert result.product.quantity == 10

    async def test_errors_propagate(self, use_case, engine):
        engine.receive.side_effect = ProductNotFoundError(3)

        with pytest.raises(ProductNotFoundError):
            await use_case.execute(
                CreatePurchaseRequest(product_id=3, quantity=1, cost_per_unit=Decimal("1"))
            )

    async def test_to_response(self, use_case, engine):
        engine.receive.return_value = _outcome()
        result = await use_case.execute(
            CreatePurchaseRequest(product_id=3, quantity=10, cost_per_unit=Decimal("5.99"))
        )

        response = use_case.to_response(result)

        assert response.purchase.total_cost == Decimal("59.90")
        assert response.product.average_cost == Decimal("5.99")
        assert response.product.stock_value == Decimal("59.90")
