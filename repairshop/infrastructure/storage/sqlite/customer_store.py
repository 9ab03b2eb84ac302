"""SQLite implementation of customer storage."""

from datetime import datetime

import aiosqlite

from repairshop.config import get_logger
from repairshop.core.entities.customer import Customer
from repairshop.core.exceptions import CustomerNotFoundError
from repairshop.core.interfaces.customer_store import ICustomerStore
from repairshop.infrastructure.storage.sqlite._rows import to_datetime
from repairshop.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteCustomerStore(ICustomerStore):
    """SQLite implementation of customer storage."""

    async def list_customers(self) -> list[Customer]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM customers ORDER BY created_at DESC, id DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_customer(r) for r in rows]

    async def get_customer(self, customer_id: int) -> Customer | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM customers WHERE id = ?", (customer_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_customer(row) if row else None

    async def create_customer(self, customer: Customer) -> Customer:
        customer.created_at = datetime.now()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO customers (name, phone, address, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    customer.name,
                    customer.phone,
                    customer.address,
                    customer.created_at.isoformat(),
                ),
            )
            customer.id = cursor.lastrowid

        logger.info("customer_created", customer_id=customer.id)
        return customer

    async def update_customer(self, customer: Customer) -> Customer:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE customers SET name = ?, phone = ?, address = ? WHERE id = ?",
                (customer.name, customer.phone, customer.address, customer.id),
            )
            if cursor.rowcount == 0:
                raise CustomerNotFoundError(customer.id)

        logger.info("customer_updated", customer_id=customer.id)
        return await self.get_customer(customer.id)

    @staticmethod
    def _row_to_customer(row: aiosqlite.Row) -> Customer:
        return Customer(
            id=row["id"],
            name=row["name"],
            phone=row["phone"],
            address=row["address"],
            created_at=to_datetime(row["created_at"]),
        )
