"""API route modules."""

from repairshop.api.routes.catalog import categories_router, units_router
from repairshop.api.routes.customers import router as customers_router
from repairshop.api.routes.dashboard import router as dashboard_router
from repairshop.api.routes.health import router as health_router
from repairshop.api.routes.products import router as products_router
from repairshop.api.routes.purchases import router as purchases_router
from repairshop.api.routes.repairs import router as repairs_router
from repairshop.api.routes.reports import router as reports_router
from repairshop.api.routes.sales import router as sales_router
from repairshop.api.routes.settings import router as settings_router

__all__ = [
    "health_router",
    "categories_router",
    "units_router",
    "products_router",
    "customers_router",
    "purchases_router",
    "sales_router",
    "repairs_router",
    "dashboard_router",
    "reports_router",
    "settings_router",
]
