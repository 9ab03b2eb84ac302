"""
SQLite stock ledger and unit of work.

``SQLiteUnitOfWork.begin()`` opens one ``BEGIN IMMEDIATE`` transaction and
yields a ``SQLiteStockLedger`` bound to that connection. The ledger is the only
code that writes ``products.quantity`` and ``products.average_cost``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal

import aiosqlite

from repairshop.config import get_logger
from repairshop.core.entities.catalog import Product
from repairshop.core.entities.purchase import PurchaseRecord
from repairshop.core.entities.repair import Repair
from repairshop.core.entities.sale import Sale
from repairshop.core.exceptions import DatabaseError
from repairshop.core.interfaces.stock_ledger import IStockLedger, IUnitOfWork
from repairshop.infrastructure.storage.sqlite._rows import to_text
from repairshop.infrastructure.storage.sqlite.catalog_store import (
    PRODUCT_SELECT,
    row_to_product,
)
from repairshop.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool

logger = get_logger(__name__)


class SQLiteStockLedger(IStockLedger):
    """Ledger operations on a connection that already holds the write lock."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def get_product(self, product_id: int) -> Product | None:
        cursor = await self._conn.execute(f"{PRODUCT_SELECT} WHERE p.id = ?", (product_id,))
        row = await cursor.fetchone()
        return row_to_product(row) if row else None

    async def get_products(self, product_ids: list[int]) -> dict[int, Product]:
        if not product_ids:
            return {}
        placeholders = ",".join("?" * len(product_ids))
        cursor = await self._conn.execute(
            f"{PRODUCT_SELECT} WHERE p.id IN ({placeholders})", product_ids
        )
        rows = await cursor.fetchall()
        return {row["id"]: row_to_product(row) for row in rows}

    async def customer_exists(self, customer_id: int) -> bool:
        cursor = await self._conn.execute(
            "SELECT 1 FROM customers WHERE id = ?", (customer_id,)
        )
        return await cursor.fetchone() is not None

    async def add_purchase(self, record: PurchaseRecord) -> PurchaseRecord:
        cursor = await self._conn.execute(
            """
            INSERT INTO purchase_records (product_id, quantity, cost_per_unit, purchase_date)
            VALUES (?, ?, ?, ?)
            """,
            (
                record.product_id,
                record.quantity,
                to_text(record.cost_per_unit),
                record.purchase_date.isoformat(),
            ),
        )
        record.id = cursor.lastrowid
        return record

    async def set_stock(
        self, product_id: int, quantity: int, average_cost: Decimal
    ) -> None:
        await self._conn.execute(
            """
            UPDATE products SET quantity = ?, average_cost = ?, updated_at = ?
            WHERE id = ?
            """,
            (quantity, to_text(average_cost), datetime.now().isoformat(), product_id),
        )

    async def withdraw_stock(self, product_id: int, quantity: int) -> bool:
        cursor = await self._conn.execute(
            """
            UPDATE products SET quantity = quantity - ?, updated_at = ?
            WHERE id = ? AND quantity >= ?
            """,
            (quantity, datetime.now().isoformat(), product_id, quantity),
        )
        return cursor.rowcount == 1

    async def add_sale(self, sale: Sale) -> Sale:
        cursor = await self._conn.execute(
            """
            INSERT INTO sales (customer_id, total_amount, total_cost, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (
                sale.customer_id,
                to_text(sale.total_amount),
                to_text(sale.total_cost),
                sale.created_at.isoformat(),
            ),
        )
        sale.id = cursor.lastrowid

        for item in sale.items:
            item.sale_id = sale.id
            item_cursor = await self._conn.execute(
                """
                INSERT INTO sale_items (
                    sale_id, product_id, quantity, price_at_time, cost_at_time
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    item.sale_id,
                    item.product_id,
                    item.quantity,
                    to_text(item.price_at_time),
                    to_text(item.cost_at_time),
                ),
            )
            item.id = item_cursor.lastrowid
        return sale

    async def add_repair(self, repair: Repair) -> Repair:
        cursor = await self._conn.execute(
            """
            INSERT INTO repairs (
                customer_id, description, total_cost, parts_cost, labor_cost, created_at
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                repair.customer_id,
                repair.description,
                to_text(repair.total_cost),
                to_text(repair.parts_cost),
                to_text(repair.labor_cost),
                repair.created_at.isoformat(),
            ),
        )
        repair.id = cursor.lastrowid

        for part in repair.used_parts:
            part.repair_id = repair.id
            part_cursor = await self._conn.execute(
                """
                INSERT INTO repair_used_parts (repair_id, product_id, quantity, cost_at_time)
                VALUES (?, ?, ?, ?)
                """,
                (part.repair_id, part.product_id, part.quantity, to_text(part.cost_at_time)),
            )
            part.id = part_cursor.lastrowid
        return repair


class SQLiteUnitOfWork(IUnitOfWork):
    """Serialized write transactions over the connection pool."""

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[SQLiteStockLedger]:
        """
        Yield a ledger inside ``BEGIN IMMEDIATE``.

        Commits when the block exits cleanly; any exception rolls back every
        write made through the ledger. Driver errors surface as DatabaseError.
        """
        pool = self._pool or await get_pool()
        try:
            async with pool.write_transaction() as conn:
                yield SQLiteStockLedger(conn)
        except aiosqlite.Error as e:
            logger.error("stock_transaction_failed", error=str(e))
            raise DatabaseError("stock_transaction", str(e)) from e
