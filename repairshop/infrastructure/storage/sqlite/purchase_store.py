"""SQLite implementation of purchase history reads."""

from datetime import datetime

import aiosqlite

from repairshop.core.entities.purchase import PurchaseRecord
from repairshop.core.interfaces.purchase_store import IPurchaseStore
from repairshop.infrastructure.storage.sqlite._filters import date_window
from repairshop.infrastructure.storage.sqlite._rows import to_datetime, to_decimal_column
from repairshop.infrastructure.storage.sqlite.connection import get_connection


class SQLitePurchaseStore(IPurchaseStore):
    """Reads purchase records joined with product names."""

    async def list_purchases(
        self,
        product_id: int | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = None,
    ) -> list[PurchaseRecord]:
        where, params = date_window(
            "pr", "purchase_date", since, until, product_id=product_id
        )
        sql = (
            "SELECT pr.*, p.name AS product_name FROM purchase_records pr "
            "JOIN products p ON p.id = pr.product_id"
            f"{where} ORDER BY pr.purchase_date DESC, pr.id DESC"
        )
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return [row_to_purchase(r) for r in rows]


def row_to_purchase(row: aiosqlite.Row) -> PurchaseRecord:
    return PurchaseRecord(
        id=row["id"],
        product_id=row["product_id"],
        quantity=row["quantity"],
        cost_per_unit=to_decimal_column(row["cost_per_unit"]),
        purchase_date=to_datetime(row["purchase_date"]),
        product_name=row["product_name"],
    )
