"""
Service factory functions for dependency injection.

Wires the SQLite stores to the layer-pure core services. Route handlers and
use cases import from here rather than from infrastructure.
"""

from repairshop.core.services import DashboardService, InventoryEngine

# Singleton service instances
_dashboard_service: DashboardService | None = None
_inventory_engine: InventoryEngine | None = None


async def get_dashboard_service() -> DashboardService:
    """
    Get or create the DashboardService instance.

    Returns:
        DashboardService bound to the SQLite read stores
    """
    global _dashboard_service

    if _dashboard_service is not None:
        return _dashboard_service

    # Lazy import infrastructure to avoid circular imports
    from repairshop.infrastructure.storage.sqlite import (
        get_catalog_store,
        get_purchase_store,
        get_repair_store,
        get_sales_store,
        get_settings_store,
    )

    _dashboard_service = DashboardService(
        catalog_store=await get_catalog_store(),
        purchase_store=await get_purchase_store(),
        sales_store=await get_sales_store(),
        repair_store=await get_repair_store(),
        settings_store=await get_settings_store(),
    )
    return _dashboard_service


def get_inventory_engine() -> InventoryEngine:
    """Get the shared InventoryEngine. It holds no state."""
    global _inventory_engine

    if _inventory_engine is None:
        _inventory_engine = InventoryEngine()
    return _inventory_engine


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _dashboard_service
    global _inventory_engine

    _dashboard_service = None
    _inventory_engine = None


__all__ = [
    "get_dashboard_service",
    "get_inventory_engine",
    "reset_services",
]
