"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from repairshop import __version__
from repairshop.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from repairshop.api.middleware.error_handler import setup_exception_handlers
from repairshop.api.routes import (
    categories_router,
    customers_router,
    dashboard_router,
    health_router,
    products_router,
    purchases_router,
    repairs_router,
    reports_router,
    sales_router,
    settings_router,
    units_router,
)
from repairshop.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database and opens the connection pool on startup, closes
    the pool on shutdown.
    """
    configure_logging()
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    from repairshop.infrastructure.storage.sqlite import close_pool, get_pool
    from repairshop.infrastructure.storage.sqlite.migrations import initialize_database

    try:
        await initialize_database()
        logger.info("database_initialized")

        await get_pool()
        logger.info("connection_pool_ready")

    except (aiosqlite.Error, OSError) as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await close_pool()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Build the API with middleware, error handlers and every router attached."""
    settings = get_settings()

    app = FastAPI(
        title="Repair Shop API",
        description="Inventory, sales and repair bookkeeping for a repair shop",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    for router in (
        health_router,
        categories_router,
        units_router,
        products_router,
        customers_router,
        purchases_router,
        sales_router,
        repairs_router,
        dashboard_router,
        reports_router,
        settings_router,
    ):
        app.include_router(router)

    @app.get("/health")
    async def root_health() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "repairshop.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
