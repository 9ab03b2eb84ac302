"""Tests for CreateSaleUseCase."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from repairshop.application.dto.requests import CreateSaleRequest, StockLineRequest
from repairshop.application.use_cases.create_sale import CreateSaleUseCase
from repairshop.core.entities import Sale, SaleItem
from repairshop.core.exceptions import InsufficientStockError
from repairshop.core.services import InventoryEngine, StockLine


def _sale(customer_name: str | None = None) -> Sale:
    return Sale(
        id=5,
        customer_id=1,
        customer_name=customer_name,
        items=[
            SaleItem(
                id=1, sale_id=5, product_id=3, quantity=2,
                price_at_time=Decimal("120"), cost_at_time=Decimal("80"),
            )
        ],
    )


@pytest.fixture
def engine():
    return AsyncMock(spec=InventoryEngine)


@pytest.fixture
def sales_store():
    return AsyncMock()


@pytest.fixture
def use_case(unit_of_work, sales_store, engine):
    return CreateSaleUseCase(unit_of_work=unit_of_work, sales_store=sales_store, engine=engine)


def _request() -> CreateSaleRequest:
    return CreateSaleRequest(
        customer_id=1,
        items=[StockLineRequest(product_id=3, quantity=2)],
    )


class TestCreateSaleUseCase:
    async def test_sells_and_reloads(self, use_case, ledger, engine, sales_store):
        engine.sell.return_value = _sale()
        sales_store.get_sale.return_value = _sale(customer_name="Alice")

        sale = await use_case.execute(_request())

        engine.sell.assert_awaited_once_with(ledger, 1, [StockLine(3, 2)], sale_date=None)
        sales_store.get_sale.assert_awaited_once_with(5)
        assert sale.customer_name == "Alice"

    async def test_shortfall_skips_reload(self, use_case, engine, sales_store):
        engine.sell.side_effect = InsufficientStockError(3, 1, 2, "Screen")

        with pytest.raises(InsufficientStockError):
            await use_case.execute(_request())
        sales_store.get_sale.assert_not_awaited()

    def test_to_response_includes_profit(self):
        response = CreateSaleUseCase.to_response(_sale())
        assert response.total_amount == Decimal("240")
        assert response.gross_profit == Decimal("80")
        assert response.items[0].line_total == Decimal("240")
