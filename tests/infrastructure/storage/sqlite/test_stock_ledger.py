"""Tests for SQLiteStockLedger and SQLiteUnitOfWork."""

from decimal import Decimal

import pytest

from repairshop.core.entities import PurchaseRecord
from repairshop.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    SQLitePurchaseStore,
    SQLiteUnitOfWork,
)


class TestStockLedger:
    async def test_withdraw_refuses_to_go_negative(self, seeded, receive):
        await receive(seeded.screen_id, 3, "10.00")

        async with SQLiteUnitOfWork().begin() as ledger:
            assert await ledger.withdraw_stock(seeded.screen_id, 4) is False
            assert await ledger.withdraw_stock(seeded.screen_id, 3) is True

        product = await SQLiteCatalogStore().get_product(seeded.screen_id)
        assert product.quantity == 0

    async def test_set_stock_keeps_full_precision(self, seeded):
        async with SQLiteUnitOfWork().begin() as ledger:
            await ledger.set_stock(seeded.screen_id, 3, Decimal("33.333333333"))

        product = await SQLiteCatalogStore().get_product(seeded.screen_id)
        assert product.average_cost == Decimal("33.333333333")

    async def test_get_products_skips_unknown_ids(self, seeded):
        async with SQLiteUnitOfWork().begin() as ledger:
            products = await ledger.get_products([seeded.screen_id, 999])
            assert await ledger.customer_exists(seeded.customer_id)
            assert not await ledger.customer_exists(999)

        assert list(products) == [seeded.screen_id]

    async def test_exception_rolls_back_every_write(self, seeded):
        with pytest.raises(RuntimeError):
            async with SQLiteUnitOfWork().begin() as ledger:
                await ledger.add_purchase(
                    PurchaseRecord(
                        product_id=seeded.screen_id, quantity=5, cost_per_unit=Decimal("9")
                    )
                )
                await ledger.set_stock(seeded.screen_id, 5, Decimal("9"))
                raise RuntimeError("abort")

        product = await SQLiteCatalogStore().get_product(seeded.screen_id)
        assert product.quantity == 0
        assert await SQLitePurchaseStore().list_purchases() == []
