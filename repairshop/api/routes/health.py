"""Liveness and database health endpoints."""

import time

import aiosqlite
from fastapi import APIRouter

from repairshop import __version__
from repairshop.application.dto.responses import ComponentHealthResponse, HealthResponse

router = APIRouter(prefix="/api/health", tags=["health"])

_started_at = time.monotonic()


def _uptime() -> float:
    return time.monotonic() - _started_at


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", version=__version__, uptime_seconds=_uptime())


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Check the shop database.

    Reports query latency plus how many migrations and products it holds,
    which is enough to tell an empty or unmigrated file from a live one.
    """
    from repairshop.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        latency = await pool.ping()
        async with pool.acquire() as conn:
            migrations = await (
                await conn.execute("SELECT COUNT(*) FROM schema_migrations")
            ).fetchone()
            products = await (await conn.execute("SELECT COUNT(*) FROM products")).fetchone()
        database = ComponentHealthResponse(
            status="available",
            latency_ms=round(latency, 3),
            details={"migrations_applied": migrations[0], "products": products[0]},
        )
    except aiosqlite.Error as e:
        database = ComponentHealthResponse(status="unavailable", details={"error": str(e)})

    return HealthResponse(
        status="healthy" if database.status == "available" else "unhealthy",
        version=__version__,
        uptime_seconds=_uptime(),
        database=database,
    )
