"""SQLite implementation of sales reads."""

from collections import defaultdict
from datetime import datetime

import aiosqlite

from repairshop.core.entities.sale import Sale, SaleItem
from repairshop.core.interfaces.sales_store import ISalesStore
from repairshop.infrastructure.storage.sqlite._filters import date_window
from repairshop.infrastructure.storage.sqlite._rows import to_datetime, to_decimal_column
from repairshop.infrastructure.storage.sqlite.connection import get_connection

_SALE_SELECT = """
    SELECT s.*, c.name AS customer_name
    FROM sales s
    JOIN customers c ON c.id = s.customer_id
"""


class SQLiteSalesStore(ISalesStore):
    """Reads sales with their line items. Sales are written by the stock ledger."""

    async def get_sale(self, sale_id: int) -> Sale | None:
        async with get_connection() as conn:
            cursor = await conn.execute(f"{_SALE_SELECT} WHERE s.id = ?", (sale_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._load_items(conn, [sale_id])
            return row_to_sale(row, items[sale_id])

    async def list_sales(
        self,
        customer_id: int | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = None,
    ) -> list[Sale]:
        where, params = date_window("s", "created_at", since, until, customer_id=customer_id)
        sql = f"{_SALE_SELECT}{where} ORDER BY s.created_at DESC, s.id DESC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            items = await self._load_items(conn, [r["id"] for r in rows])
            return [row_to_sale(r, items[r["id"]]) for r in rows]

    @staticmethod
    async def _load_items(
        conn: aiosqlite.Connection, sale_ids: list[int]
    ) -> dict[int, list[SaleItem]]:
        """Fetch the items of several sales in one query."""
        grouped: dict[int, list[SaleItem]] = defaultdict(list)
        if not sale_ids:
            return grouped

        placeholders = ",".join("?" * len(sale_ids))
        cursor = await conn.execute(
            f"""
            SELECT si.*, p.name AS product_name
            FROM sale_items si
            JOIN products p ON p.id = si.product_id
            WHERE si.sale_id IN ({placeholders})
            ORDER BY si.id
            """,
            sale_ids,
        )
        for row in await cursor.fetchall():
            grouped[row["sale_id"]].append(row_to_sale_item(row))
        return grouped


def row_to_sale(row: aiosqlite.Row, items: list[SaleItem]) -> Sale:
    return Sale(
        id=row["id"],
        customer_id=row["customer_id"],
        customer_name=row["customer_name"],
        total_amount=to_decimal_column(row["total_amount"]),
        total_cost=to_decimal_column(row["total_cost"]),
        items=items,
        created_at=to_datetime(row["created_at"]),
    )


def row_to_sale_item(row: aiosqlite.Row) -> SaleItem:
    return SaleItem(
        id=row["id"],
        sale_id=row["sale_id"],
        product_id=row["product_id"],
        quantity=row["quantity"],
        price_at_time=to_decimal_column(row["price_at_time"]),
        cost_at_time=to_decimal_column(row["cost_at_time"]),
        product_name=row["product_name"],
    )
