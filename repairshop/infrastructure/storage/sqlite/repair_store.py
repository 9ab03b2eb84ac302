"""SQLite implementation of repair reads."""

from collections import defaultdict
from datetime import datetime

import aiosqlite

from repairshop.core.entities.repair import Repair, RepairUsedPart
from repairshop.core.interfaces.repair_store import IRepairStore
from repairshop.infrastructure.storage.sqlite._filters import date_window
from repairshop.infrastructure.storage.sqlite._rows import to_datetime, to_decimal_column
from repairshop.infrastructure.storage.sqlite.connection import get_connection

_REPAIR_SELECT = """
    SELECT r.*, c.name AS customer_name
    FROM repairs r
    JOIN customers c ON c.id = r.customer_id
"""


class SQLiteRepairStore(IRepairStore):
    """Reads repairs with their used parts. Repairs are written by the stock ledger."""

    async def get_repair(self, repair_id: int) -> Repair | None:
        async with get_connection() as conn:
            cursor = await conn.execute(f"{_REPAIR_SELECT} WHERE r.id = ?", (repair_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            parts = await self._load_parts(conn, [repair_id])
            return row_to_repair(row, parts[repair_id])

    async def list_repairs(
        self,
        customer_id: int | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = None,
    ) -> list[Repair]:
        where, params = date_window("r", "created_at", since, until, customer_id=customer_id)
        sql = f"{_REPAIR_SELECT}{where} ORDER BY r.created_at DESC, r.id DESC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            parts = await self._load_parts(conn, [r["id"] for r in rows])
            return [row_to_repair(r, parts[r["id"]]) for r in rows]

    @staticmethod
    async def _load_parts(
        conn: aiosqlite.Connection, repair_ids: list[int]
    ) -> dict[int, list[RepairUsedPart]]:
        grouped: dict[int, list[RepairUsedPart]] = defaultdict(list)
        if not repair_ids:
            return grouped

        placeholders = ",".join("?" * len(repair_ids))
        cursor = await conn.execute(
            f"""
            SELECT rp.*, p.name AS product_name
            FROM repair_used_parts rp
            JOIN products p ON p.id = rp.product_id
            WHERE rp.repair_id IN ({placeholders})
            ORDER BY rp.id
            """,
            repair_ids,
        )
        for row in await cursor.fetchall():
            grouped[row["repair_id"]].append(row_to_used_part(row))
        return grouped


def row_to_repair(row: aiosqlite.Row, parts: list[RepairUsedPart]) -> Repair:
    return Repair(
        id=row["id"],
        customer_id=row["customer_id"],
        customer_name=row["customer_name"],
        description=row["description"],
        total_cost=to_decimal_column(row["total_cost"]),
        parts_cost=to_decimal_column(row["parts_cost"]),
        labor_cost=to_decimal_column(row["labor_cost"]),
        used_parts=parts,
        created_at=to_datetime(row["created_at"]),
    )


def row_to_used_part(row: aiosqlite.Row) -> RepairUsedPart:
    return RepairUsedPart(
        id=row["id"],
        repair_id=row["repair_id"],
        product_id=row["product_id"],
        quantity=row["quantity"],
        cost_at_time=to_decimal_column(row["cost_at_time"]),
        product_name=row["product_name"],
    )
