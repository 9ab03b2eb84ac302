"""SQLite implementation of catalog storage (categories, units, products)."""

from datetime import datetime

import aiosqlite

from repairshop.config import get_logger
from repairshop.core.entities.catalog import Category, Product, Unit
from repairshop.core.exceptions import (
    CategoryNotFoundError,
    DatabaseError,
    DuplicateNameError,
    ProductNotFoundError,
    ReferencedEntityError,
    UnitNotFoundError,
)
from repairshop.core.interfaces.catalog_store import ICatalogStore
from repairshop.infrastructure.storage.sqlite._rows import (
    to_datetime,
    to_decimal_column,
    to_text,
)
from repairshop.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

PRODUCT_SELECT = """
    SELECT p.*, c.name AS category_name, u.name AS unit_name
    FROM products p
    LEFT JOIN categories c ON c.id = p.category_id
    LEFT JOIN units u ON u.id = p.unit_id
"""


def _translate_integrity_error(e: aiosqlite.IntegrityError, entity: str, name: str) -> Exception:
    if "UNIQUE" in str(e):
        return DuplicateNameError(entity, name)
    return DatabaseError(f"save_{entity.lower()}", str(e))


class SQLiteCatalogStore(ICatalogStore):
    """SQLite implementation of category, unit and product storage.

    Product ``quantity`` and ``average_cost`` are only read here; the stock
    ledger is the sole writer.
    """

    # Categories

    async def list_categories(self) -> list[Category]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT c.*, COUNT(p.id) AS product_count
                FROM categories c
                LEFT JOIN products p ON p.category_id = c.id
                GROUP BY c.id
                ORDER BY c.name
                """
            )
            rows = await cursor.fetchall()
            return [self._row_to_category(r) for r in rows]

    async def get_category(self, category_id: int) -> Category | None:
        async with get_connection() as conn:
            return await self._fetch_category(conn, category_id)

    async def create_category(self, category: Category) -> Category:
        category.created_at = datetime.now()
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "INSERT INTO categories (name, created_at) VALUES (?, ?)",
                    (category.name, category.created_at.isoformat()),
                )
                category.id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            raise _translate_integrity_error(e, "Category", category.name) from e

        logger.info("category_created", category_id=category.id, name=category.name)
        return category

    async def update_category(self, category: Category) -> Category:
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "UPDATE categories SET name = ? WHERE id = ?",
                    (category.name, category.id),
                )
                if cursor.rowcount == 0:
                    raise CategoryNotFoundError(category.id)
        except aiosqlite.IntegrityError as e:
            raise _translate_integrity_error(e, "Category", category.name) from e

        logger.info("category_updated", category_id=category.id)
        return await self.get_category(category.id)

    async def delete_category(self, category_id: int) -> Category:
        async with get_transaction() as conn:
            category = await self._fetch_category(conn, category_id)
            if category is None:
                raise CategoryNotFoundError(category_id)
            if category.product_count > 0:
                raise ReferencedEntityError(
                    "Category", category_id, category.product_count, "product"
                )
            await conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))

        logger.info("category_deleted", category_id=category_id)
        return category

    async def _fetch_category(
        self, conn: aiosqlite.Connection, category_id: int
    ) -> Category | None:
        cursor = await conn.execute(
            """
            SELECT c.*, (SELECT COUNT(*) FROM products WHERE category_id = c.id)
                AS product_count
            FROM categories c WHERE c.id = ?
            """,
            (category_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_category(row) if row else None

    # Units

    async def list_units(self) -> list[Unit]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM units ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_unit(r) for r in rows]

    async def get_unit(self, unit_id: int) -> Unit | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM units WHERE id = ?", (unit_id,))
            row = await cursor.fetchone()
            return self._row_to_unit(row) if row else None

    async def create_unit(self, unit: Unit) -> Unit:
        unit.created_at = datetime.now()
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "INSERT INTO units (name, created_at) VALUES (?, ?)",
                    (unit.name, unit.created_at.isoformat()),
                )
                unit.id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            raise _translate_integrity_error(e, "Unit", unit.name) from e

        logger.info("unit_created", unit_id=unit.id, name=unit.name)
        return unit

    async def update_unit(self, unit: Unit) -> Unit:
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "UPDATE units SET name = ? WHERE id = ?", (unit.name, unit.id)
                )
                if cursor.rowcount == 0:
                    raise UnitNotFoundError(unit.id)
        except aiosqlite.IntegrityError as e:
            raise _translate_integrity_error(e, "Unit", unit.name) from e

        logger.info("unit_updated", unit_id=unit.id)
        return await self.get_unit(unit.id)

    async def delete_unit(self, unit_id: int) -> Unit:
        async with get_transaction() as conn:
            cursor = await conn.execute("SELECT * FROM units WHERE id = ?", (unit_id,))
            row = await cursor.fetchone()
            if row is None:
                raise UnitNotFoundError(unit_id)

            cursor = await conn.execute(
                "SELECT COUNT(*) FROM products WHERE unit_id = ?", (unit_id,)
            )
            in_use = (await cursor.fetchone())[0]
            if in_use > 0:
                raise ReferencedEntityError("Unit", unit_id, in_use, "product")

            await conn.execute("DELETE FROM units WHERE id = ?", (unit_id,))

        logger.info("unit_deleted", unit_id=unit_id)
        return self._row_to_unit(row)

    # Products

    async def list_products(self) -> list[Product]:
        async with get_connection() as conn:
            cursor = await conn.execute(f"{PRODUCT_SELECT} ORDER BY p.name")
            rows = await cursor.fetchall()
            return [row_to_product(r) for r in rows]

    async def get_product(self, product_id: int) -> Product | None:
        async with get_connection() as conn:
            cursor = await conn.execute(f"{PRODUCT_SELECT} WHERE p.id = ?", (product_id,))
            row = await cursor.fetchone()
            return row_to_product(row) if row else None

    async def create_product(self, product: Product) -> Product:
        """Insert a product. Stock always starts empty at zero cost."""
        now = datetime.now()
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO products (
                        name, category_id, unit_id, sale_price,
                        quantity, average_cost, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, 0, '0', ?, ?)
                    """,
                    (
                        product.name,
                        product.category_id,
                        product.unit_id,
                        to_text(product.sale_price),
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
                product_id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            raise _translate_integrity_error(e, "Product", product.name) from e

        logger.info("product_created", product_id=product_id, name=product.name)
        return await self.get_product(product_id)

    async def update_product(self, product: Product) -> Product:
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE products SET
                        name = ?, category_id = ?, unit_id = ?,
                        sale_price = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        product.name,
                        product.category_id,
                        product.unit_id,
                        to_text(product.sale_price),
                        datetime.now().isoformat(),
                        product.id,
                    ),
                )
                if cursor.rowcount == 0:
                    raise ProductNotFoundError(product.id)
        except aiosqlite.IntegrityError as e:
            raise _translate_integrity_error(e, "Product", product.name) from e

        logger.info("product_updated", product_id=product.id)
        return await self.get_product(product.id)

    async def delete_product(self, product_id: int) -> Product:
        """Delete a product that has never been purchased, sold or used in a repair."""
        async with get_transaction() as conn:
            cursor = await conn.execute(f"{PRODUCT_SELECT} WHERE p.id = ?", (product_id,))
            row = await cursor.fetchone()
            if row is None:
                raise ProductNotFoundError(product_id)

            cursor = await conn.execute(
                """
                SELECT
                    (SELECT COUNT(*) FROM purchase_records WHERE product_id = ?)
                  + (SELECT COUNT(*) FROM sale_items WHERE product_id = ?)
                  + (SELECT COUNT(*) FROM repair_used_parts WHERE product_id = ?)
                """,
                (product_id, product_id, product_id),
            )
            movements = (await cursor.fetchone())[0]
            if movements > 0:
                raise ReferencedEntityError("Product", product_id, movements, "stock movement")

            await conn.execute("DELETE FROM products WHERE id = ?", (product_id,))

        logger.info("product_deleted", product_id=product_id)
        return row_to_product(row)

    async def list_low_stock(self, threshold: int, limit: int = 20) -> list[Product]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{PRODUCT_SELECT} WHERE p.quantity < ? ORDER BY p.quantity ASC, p.name LIMIT ?",
                (threshold, limit),
            )
            rows = await cursor.fetchall()
            return [row_to_product(r) for r in rows]

    @staticmethod
    def _row_to_category(row: aiosqlite.Row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            product_count=row["product_count"],
            created_at=to_datetime(row["created_at"]),
        )

    @staticmethod
    def _row_to_unit(row: aiosqlite.Row) -> Unit:
        return Unit(id=row["id"], name=row["name"], created_at=to_datetime(row["created_at"]))


def row_to_product(row: aiosqlite.Row) -> Product:
    """Convert a joined products row to a Product entity."""
    return Product(
        id=row["id"],
        name=row["name"],
        category_id=row["category_id"],
        unit_id=row["unit_id"],
        sale_price=to_decimal_column(row["sale_price"]),
        quantity=row["quantity"],
        average_cost=to_decimal_column(row["average_cost"]),
        category_name=row["category_name"],
        unit_name=row["unit_name"],
        created_at=to_datetime(row["created_at"]),
        updated_at=to_datetime(row["updated_at"]),
    )
