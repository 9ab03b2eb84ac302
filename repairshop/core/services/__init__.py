"""
Core business logic services.

Layer-pure services that depend only on:
- repairshop/core/entities/*
- repairshop/core/interfaces/*
- repairshop/core/exceptions.py

NO infrastructure imports. Stores and ledgers are passed in.
"""

from repairshop.core.services.costing import next_average_cost
from repairshop.core.services.dashboard import (
    Activity,
    DashboardPeriod,
    DashboardService,
    DashboardSummary,
    LowStockAlert,
    RepairAnalytics,
    RepairDateRange,
    TopProduct,
    TrendPoint,
    repair_analytics,
)
from repairshop.core.services.inventory_engine import (
    InventoryEngine,
    ReceiptOutcome,
    StockLine,
)
from repairshop.core.services.reports import (
    IReportRenderer,
    RepairsReportData,
    SalesReportData,
    month_bounds,
)

__all__ = [
    # Costing
    "next_average_cost",
    # Inventory engine
    "InventoryEngine",
    "ReceiptOutcome",
    "StockLine",
    # Dashboard
    "Activity",
    "DashboardPeriod",
    "DashboardService",
    "DashboardSummary",
    "LowStockAlert",
    "RepairAnalytics",
    "RepairDateRange",
    "TopProduct",
    "TrendPoint",
    "repair_analytics",
    # Reports
    "IReportRenderer",
    "RepairsReportData",
    "SalesReportData",
    "month_bounds",
]
