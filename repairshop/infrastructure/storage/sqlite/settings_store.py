"""SQLite implementation of the business profile store."""

from datetime import datetime

import aiosqlite

from repairshop.config import get_logger
from repairshop.core.entities.business_profile import BusinessProfile
from repairshop.core.interfaces.settings_store import ISettingsStore
from repairshop.infrastructure.storage.sqlite._rows import to_datetime
from repairshop.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteSettingsStore(ISettingsStore):
    """Keeps the business profile as a single row (the first one)."""

    async def get_business_profile(self) -> BusinessProfile | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM business_profile ORDER BY id LIMIT 1")
            row = await cursor.fetchone()
            return self._row_to_profile(row) if row else None

    async def save_business_profile(self, profile: BusinessProfile) -> BusinessProfile:
        profile.updated_at = datetime.now()
        values = (
            profile.shop_name,
            profile.address,
            profile.phone_number,
            profile.contact_email,
            profile.logo_url,
            profile.low_stock_threshold,
            profile.updated_at.isoformat(),
        )

        async with get_transaction() as conn:
            cursor = await conn.execute("SELECT id FROM business_profile ORDER BY id LIMIT 1")
            existing = await cursor.fetchone()
            if existing:
                profile.id = existing["id"]
                await conn.execute(
                    """
                    UPDATE business_profile SET
                        shop_name = ?, address = ?, phone_number = ?,
                        contact_email = ?, logo_url = ?, low_stock_threshold = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (*values, profile.id),
                )
            else:
                cursor = await conn.execute(
                    """
                    INSERT INTO business_profile (
                        shop_name, address, phone_number, contact_email,
                        logo_url, low_stock_threshold, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    values,
                )
                profile.id = cursor.lastrowid

        logger.info("business_profile_saved", profile_id=profile.id)
        return profile

    @staticmethod
    def _row_to_profile(row: aiosqlite.Row) -> BusinessProfile:
        return BusinessProfile(
            id=row["id"],
            shop_name=row["shop_name"],
            address=row["address"],
            phone_number=row["phone_number"],
            contact_email=row["contact_email"],
            logo_url=row["logo_url"],
            low_stock_threshold=row["low_stock_threshold"],
            updated_at=to_datetime(row["updated_at"]),
        )
