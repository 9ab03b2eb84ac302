"""End-to-end inventory properties against a real SQLite database."""

import asyncio
from decimal import Decimal

import pytest

from repairshop.application.dto.requests import (
    CreatePurchaseRequest,
    CreateRepairRequest,
    CreateSaleRequest,
    StockLineRequest,
)
from repairshop.application.use_cases import (
    CreateRepairUseCase,
    CreateSaleUseCase,
    RecordPurchaseUseCase,
)
from repairshop.core.exceptions import (
    CustomerNotFoundError,
    InsufficientStockError,
    ProductNotFoundError,
)
from repairshop.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteCatalogStore,
    SQLitePurchaseStore,
    SQLiteRepairStore,
    SQLiteSalesStore,
    SQLiteUnitOfWork,
)

pytestmark = pytest.mark.integration


async def _purchase(product_id: int, quantity: int, cost: str):
    return await RecordPurchaseUseCase().execute(
        CreatePurchaseRequest(
            product_id=product_id, quantity=quantity, cost_per_unit=Decimal(cost)
        )
    )


def _sale(customer_id: int, *lines: tuple[int, int]) -> CreateSaleRequest:
    return CreateSaleRequest(
        customer_id=customer_id,
        items=[StockLineRequest(product_id=p, quantity=q) for p, q in lines],
    )


async def _stock(product_id: int) -> tuple[int, Decimal]:
    product = await SQLiteCatalogStore().get_product(product_id)
    return product.quantity, product.average_cost


class TestPurchases:
    async def test_first_purchase_sets_cost(self, seeded):
        result = await _purchase(seeded.screen_id, 10, "5.99")

        assert result.product.quantity == 10
        assert await _stock(seeded.screen_id) == (10, Decimal("5.99"))
        records = await SQLitePurchaseStore().list_purchases(product_id=seeded.screen_id)
        assert len(records) == 1

    async def test_average_matches_weighted_mean_of_history(self, seeded):
        batches = [(10, "5.99"), (4, "7.25"), (1, "3.10"), (25, "6.00")]
        for qty, cost in batches:
            await _purchase(seeded.screen_id, qty, cost)

        records = await SQLitePurchaseStore().list_purchases(product_id=seeded.screen_id)
        units = sum(r.quantity for r in records)
        spent = sum(r.total_cost for r in records)
        quantity, average = await _stock(seeded.screen_id)

        assert quantity == units == 40
        assert (average - spent / units).copy_abs() < Decimal("1e-20")

    async def test_cost_resets_after_depletion(self, seeded):
        await _purchase(seeded.battery_id, 2, "20.00")
        await CreateSaleUseCase().execute(_sale(seeded.customer_id, (seeded.battery_id, 2)))

        await _purchase(seeded.battery_id, 3, "30.00")

        assert await _stock(seeded.battery_id) == (3, Decimal("30.00"))

    async def test_unknown_product(self, seeded):
        with pytest.raises(ProductNotFoundError):
            await _purchase(9999, 1, "1.00")
        assert await SQLitePurchaseStore().list_purchases() == []


class TestSales:
    async def test_shortfall_changes_nothing(self, seeded):
        await _purchase(seeded.screen_id, 5, "80.00")
        await _purchase(seeded.battery_id, 1, "20.00")

        with pytest.raises(InsufficientStockError) as exc_info:
            await CreateSaleUseCase().execute(
                _sale(seeded.customer_id, (seeded.screen_id, 2), (seeded.battery_id, 2))
            )

        assert exc_info.value.product_id == seeded.battery_id
        assert (await _stock(seeded.screen_id))[0] == 5
        assert (await _stock(seeded.battery_id))[0] == 1
        assert await SQLiteSalesStore().list_sales() == []

    async def test_unknown_customer_changes_nothing(self, seeded):
        await _purchase(seeded.screen_id, 5, "80.00")

        with pytest.raises(CustomerNotFoundError):
            await CreateSaleUseCase().execute(_sale(9999, (seeded.screen_id, 1)))

        assert (await _stock(seeded.screen_id))[0] == 5

    async def test_snapshot_survives_later_purchase(self, seeded):
        await _purchase(seeded.screen_id, 10, "80.00")
        sale = await CreateSaleUseCase().execute(_sale(seeded.customer_id, (seeded.screen_id, 2)))

        await _purchase(seeded.screen_id, 10, "100.00")

        reloaded = await SQLiteSalesStore().get_sale(sale.id)
        assert reloaded.items[0].cost_at_time == Decimal("80.00")
        assert reloaded.items[0].price_at_time == Decimal("120.00")
        assert reloaded.gross_profit == Decimal("80.00")
        assert await _stock(seeded.screen_id) == (18, Decimal(1640) / 18)

    async def test_concurrent_sales_never_oversell(self, seeded):
        await _purchase(seeded.screen_id, 10, "80.00")

        results = await asyncio.gather(
            CreateSaleUseCase().execute(_sale(seeded.customer_id, (seeded.screen_id, 6))),
            CreateSaleUseCase().execute(_sale(seeded.customer_id, (seeded.screen_id, 6))),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, InsufficientStockError)]
        assert len(failures) == 1
        assert (await _stock(seeded.screen_id))[0] == 4
        assert len(await SQLiteSalesStore().list_sales()) == 1

    async def test_separate_pools_never_oversell(self, seeded, isolated_settings):
        """Two pools share only the database file, as two server processes would."""
        await _purchase(seeded.screen_id, 10, "80.00")
        db_path = isolated_settings.storage.db_path
        pools = [ConnectionPool(db_path, pool_size=1, busy_timeout=5000) for _ in range(2)]

        try:
            results = await asyncio.gather(
                *(
                    CreateSaleUseCase(unit_of_work=SQLiteUnitOfWork(pool)).execute(
                        _sale(seeded.customer_id, (seeded.screen_id, 6))
                    )
                    for pool in pools
                ),
                return_exceptions=True,
            )
        finally:
            for pool in pools:
                await pool.close()

        failures = [r for r in results if isinstance(r, InsufficientStockError)]
        assert len(failures) == 1
        assert failures[0].available == 4
        assert (await _stock(seeded.screen_id))[0] == 4
        assert len(await SQLiteSalesStore().list_sales()) == 1


class TestRepairs:
    async def test_labor_is_total_less_parts(self, seeded):
        await _purchase(seeded.screen_id, 5, "40.00")

        repair = await CreateRepairUseCase().execute(
            CreateRepairRequest(
                customer_id=seeded.customer_id,
                description="Screen replacement",
                total_cost=Decimal("200"),
                used_parts=[StockLineRequest(product_id=seeded.screen_id, quantity=2)],
            )
        )

        assert repair.parts_cost == Decimal("80.00")
        assert repair.labor_cost == Decimal("120.00")
        assert repair.customer_name == "Alice Martin"
        assert (await _stock(seeded.screen_id))[0] == 3

    async def test_shortfall_leaves_no_repair(self, seeded):
        await _purchase(seeded.screen_id, 1, "40.00")

        with pytest.raises(InsufficientStockError):
            await CreateRepairUseCase().execute(
                CreateRepairRequest(
                    customer_id=seeded.customer_id,
                    description="Two screens",
                    total_cost=Decimal("300"),
                    used_parts=[StockLineRequest(product_id=seeded.screen_id, quantity=2)],
                )
            )

        assert await SQLiteRepairStore().list_repairs() == []
        assert (await _stock(seeded.screen_id))[0] == 1
