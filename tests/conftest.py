"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

import pytest

from repairshop.application.services import reset_services
from repairshop.config import Settings, get_settings, reset_settings
from repairshop.core.entities import Category, Customer, Product, Repair, Sale, Unit
from repairshop.core.services import InventoryEngine, ReceiptOutcome, StockLine
from repairshop.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    SQLiteCustomerStore,
    SQLiteUnitOfWork,
    close_pool,
)
from repairshop.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Point storage at a per-test directory and drop cached singletons."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("STORAGE_POOL_SIZE", "2")
    monkeypatch.setenv("STORAGE_BUSY_TIMEOUT", "5000")
    reset_settings()
    reset_services()
    yield get_settings()
    reset_settings()
    reset_services()


@pytest.fixture
async def db(isolated_settings: Settings) -> AsyncGenerator[Path, None]:
    """Migrated temporary database with the global pool pointed at it."""
    import repairshop.infrastructure.storage.sqlite.connection as conn_module

    conn_module._pool = None
    db_path = isolated_settings.storage.db_path
    await initialize_database(db_path, create_backup_before=False)
    try:
        yield db_path
    finally:
        await close_pool()


@dataclass
class Seed:
    category_id: int
    unit_id: int
    screen_id: int
    battery_id: int
    customer_id: int


@pytest.fixture
async def seeded(db: Path) -> Seed:
    """One category, one unit, two products with no stock, one customer."""
    catalog = SQLiteCatalogStore()
    category = await catalog.create_category(Category(name="Phone Parts"))
    unit = await catalog.create_unit(Unit(name="piece"))
    screen = await catalog.create_product(
        Product(
            name="iPhone 12 Screen",
            category_id=category.id,
            unit_id=unit.id,
            sale_price=Decimal("120.00"),
        )
    )
    battery = await catalog.create_product(
        Product(
            name="Galaxy S21 Battery",
            category_id=category.id,
            unit_id=unit.id,
            sale_price=Decimal("45.00"),
        )
    )
    customer = await SQLiteCustomerStore().create_customer(
        Customer(name="Alice Martin", phone="555-0100")
    )
    return Seed(
        category_id=category.id,
        unit_id=unit.id,
        screen_id=screen.id,
        battery_id=battery.id,
        customer_id=customer.id,
    )


@pytest.fixture
def receive(db: Path) -> Callable[[int, int, str], Awaitable[ReceiptOutcome]]:
    """Record a purchase through the real engine and ledger."""

    async def _receive(product_id: int, quantity: int, cost: str) -> ReceiptOutcome:
        async with SQLiteUnitOfWork().begin() as ledger:
            return await InventoryEngine().receive(
                ledger, product_id, quantity, Decimal(cost)
            )

    return _receive


@pytest.fixture
def sell(db: Path) -> Callable[..., Awaitable[Sale]]:
    """Record a sale through the real engine and ledger."""

    async def _sell(customer_id: int, *lines: tuple[int, int], sale_date=None) -> Sale:
        async with SQLiteUnitOfWork().begin() as ledger:
            return await InventoryEngine().sell(
                ledger, customer_id, [StockLine(p, q) for p, q in lines], sale_date=sale_date
            )

    return _sell


@pytest.fixture
def repair(db: Path) -> Callable[..., Awaitable[Repair]]:
    """Record a repair through the real engine and ledger."""

    async def _repair(
        customer_id: int, total_cost: str, *lines: tuple[int, int], description: str = "Repair"
    ) -> Repair:
        async with SQLiteUnitOfWork().begin() as ledger:
            return await InventoryEngine().consume_for_repair(
                ledger,
                customer_id=customer_id,
                description=description,
                total_cost=Decimal(total_cost),
                lines=[StockLine(p, q) for p, q in lines],
            )

    return _repair
