"""
Dashboard and analytics aggregation.

Read-only: every figure is computed in Python from ledger rows loaded through
the read stores, so Decimal money never passes through SQL arithmetic.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum

from repairshop.config import get_logger
from repairshop.core.entities.business_profile import DEFAULT_LOW_STOCK_THRESHOLD
from repairshop.core.entities.catalog import Product
from repairshop.core.entities.purchase import PurchaseRecord
from repairshop.core.entities.repair import Repair
from repairshop.core.entities.sale import Sale
from repairshop.core.interfaces.catalog_store import ICatalogStore
from repairshop.core.interfaces.purchase_store import IPurchaseStore
from repairshop.core.interfaces.repair_store import IRepairStore
from repairshop.core.interfaces.sales_store import ISalesStore
from repairshop.core.interfaces.settings_store import ISettingsStore
from repairshop.core.money import ZERO

logger = get_logger(__name__)

ACTIVITY_DESCRIPTION_LIMIT = 30


class DashboardPeriod(str, Enum):
    """Reporting window for the summary and top products."""

    TODAY = "today"
    LAST_7_DAYS = "last7days"
    THIS_MONTH = "thismonth"


class RepairDateRange(str, Enum):
    """Filter for the repairs list."""

    TODAY = "today"
    LAST_7_DAYS = "7days"
    LAST_MONTH = "1month"


def period_start(period: DashboardPeriod, now: datetime | None = None) -> datetime:
    """Start of the window: midnight today, now minus 7 days, or the 1st of the month."""
    now = now or datetime.now()
    if period == DashboardPeriod.TODAY:
        return datetime.combine(now.date(), time.min)
    if period == DashboardPeriod.LAST_7_DAYS:
        return now - timedelta(days=7)
    return datetime.combine(now.date().replace(day=1), time.min)


def repair_range_start(date_range: RepairDateRange, now: datetime | None = None) -> datetime:
    now = now or datetime.now()
    if date_range == RepairDateRange.TODAY:
        return datetime.combine(now.date(), time.min)
    if date_range == RepairDateRange.LAST_7_DAYS:
        return now - timedelta(days=7)
    return now - timedelta(days=30)


@dataclass
class DashboardSummary:
    total_expenses: Decimal
    total_sales_income: Decimal
    total_repair_income: Decimal
    sales_profit: Decimal
    repair_profit: Decimal
    total_stock_value: Decimal

    @property
    def gross_profit(self) -> Decimal:
        return self.sales_profit + self.repair_profit


@dataclass
class TrendPoint:
    day: date
    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO


@dataclass
class TopProduct:
    product_id: int
    product_name: str
    total_sales: int
    total_revenue: Decimal


@dataclass
class Activity:
    id: str
    type: str
    description: str
    amount: Decimal
    date: datetime
    customer_name: str | None = None


@dataclass
class LowStockAlert:
    id: int
    name: str
    current_stock: int
    category: str | None
    unit: str | None


@dataclass
class RepairAnalytics:
    total_repairs: int
    total_revenue: Decimal
    average_repair_cost: Decimal
    total_labor_revenue: Decimal
    total_parts_cost: Decimal


# Pure aggregations


def summarize(
    purchases: list[PurchaseRecord],
    sales: list[Sale],
    repairs: list[Repair],
    products: list[Product],
) -> DashboardSummary:
    """Fold one period's movements into the dashboard headline figures.

    Repair profit is the labor portion of repairs; parts are already expensed
    through purchases.
    """
    sales_income = sum((s.total_amount for s in sales), ZERO)
    sales_cost = sum((s.total_cost for s in sales), ZERO)
    return DashboardSummary(
        total_expenses=sum((p.total_cost for p in purchases), ZERO),
        total_sales_income=sales_income,
        total_repair_income=sum((r.total_cost for r in repairs), ZERO),
        sales_profit=sales_income - sales_cost,
        repair_profit=sum((r.labor_cost for r in repairs), ZERO),
        total_stock_value=sum((p.stock_value for p in products), ZERO),
    )


def daily_trend(
    sales: list[Sale],
    repairs: list[Repair],
    purchases: list[PurchaseRecord],
    days: int,
    today: date | None = None,
) -> list[TrendPoint]:
    """Per-day income (sales + repairs) and expenses (purchases), oldest first.

    Every day in the window is present, zero-filled when nothing happened.
    """
    today = today or date.today()
    points = {
        today - timedelta(days=offset): TrendPoint(day=today - timedelta(days=offset))
        for offset in range(days)
    }

    for sale in sales:
        point = points.get(sale.created_at.date())
        if point is not None:
            point.total_income += sale.total_amount
    for repair in repairs:
        point = points.get(repair.created_at.date())
        if point is not None:
            point.total_income += repair.total_cost
    for purchase in purchases:
        point = points.get(purchase.purchase_date.date())
        if point is not None:
            point.total_expenses += purchase.total_cost

    return [points[day] for day in sorted(points)]


def rank_products(sales: list[Sale], limit: int = 5) -> list[TopProduct]:
    """Best sellers by revenue (price_at_time x quantity), ties by units sold."""
    units: dict[int, int] = defaultdict(int)
    revenue: dict[int, Decimal] = defaultdict(lambda: ZERO)
    names: dict[int, str] = {}

    for sale in sales:
        for item in sale.items:
            units[item.product_id] += item.quantity
            revenue[item.product_id] += item.line_revenue
            if item.product_name:
                names[item.product_id] = item.product_name

    ranked = sorted(revenue, key=lambda pid: (revenue[pid], units[pid]), reverse=True)
    return [
        TopProduct(
            product_id=pid,
            product_name=names.get(pid, "Unknown Product"),
            total_sales=units[pid],
            total_revenue=revenue[pid],
        )
        for pid in ranked[:limit]
    ]


def merge_activities(
    sales: list[Sale],
    repairs: list[Repair],
    purchases: list[PurchaseRecord],
    limit: int = 10,
) -> list[Activity]:
    """Interleave recent sales, repairs and purchases, newest first."""
    activities: list[Activity] = []

    for sale in sales:
        activities.append(
            Activity(
                id=f"sale-{sale.id}",
                type="sale",
                description="Sale completed",
                amount=sale.total_amount,
                date=sale.created_at,
                customer_name=sale.customer_name,
            )
        )
    for repair in repairs:
        description = repair.description
        if len(description) > ACTIVITY_DESCRIPTION_LIMIT:
            description = f"{description[:ACTIVITY_DESCRIPTION_LIMIT]}..."
        activities.append(
            Activity(
                id=f"repair-{repair.id}",
                type="repair",
                description=description,
                amount=repair.total_cost,
                date=repair.created_at,
                customer_name=repair.customer_name,
            )
        )
    for purchase in purchases:
        activities.append(
            Activity(
                id=f"purchase-{purchase.id}",
                type="purchase",
                description=f"Purchased {purchase.product_name or 'product'}",
                amount=purchase.total_cost,
                date=purchase.purchase_date,
            )
        )

    activities.sort(key=lambda a: a.date, reverse=True)
    return activities[:limit]


def repair_analytics(repairs: list[Repair]) -> RepairAnalytics:
    total_revenue = sum((r.total_cost for r in repairs), ZERO)
    count = len(repairs)
    return RepairAnalytics(
        total_repairs=count,
        total_revenue=total_revenue,
        average_repair_cost=total_revenue / count if count else ZERO,
        total_labor_revenue=sum((r.labor_cost for r in repairs), ZERO),
        total_parts_cost=sum((r.parts_cost for r in repairs), ZERO),
    )


class DashboardService:
    """
    Layer-pure service behind the dashboard endpoints.

    Loads movements through the read stores and delegates the arithmetic to
    the pure functions above.
    """

    def __init__(
        self,
        catalog_store: ICatalogStore,
        purchase_store: IPurchaseStore,
        sales_store: ISalesStore,
        repair_store: IRepairStore,
        settings_store: ISettingsStore,
    ) -> None:
        self._catalog = catalog_store
        self._purchases = purchase_store
        self._sales = sales_store
        self._repairs = repair_store
        self._settings = settings_store

    async def get_summary(
        self, period: DashboardPeriod, now: datetime | None = None
    ) -> DashboardSummary:
        since = period_start(period, now)
        summary = summarize(
            await self._purchases.list_purchases(since=since),
            await self._sales.list_sales(since=since),
            await self._repairs.list_repairs(since=since),
            await self._catalog.list_products(),
        )
        logger.debug("dashboard_summary_computed", period=period.value)
        return summary

    async def get_trend(self, days: int = 30, today: date | None = None) -> list[TrendPoint]:
        today = today or date.today()
        since = datetime.combine(today - timedelta(days=days - 1), time.min)
        return daily_trend(
            await self._sales.list_sales(since=since),
            await self._repairs.list_repairs(since=since),
            await self._purchases.list_purchases(since=since),
            days=days,
            today=today,
        )

    async def get_top_products(
        self, period: DashboardPeriod, limit: int = 5, now: datetime | None = None
    ) -> list[TopProduct]:
        sales = await self._sales.list_sales(since=period_start(period, now))
        return rank_products(sales, limit=limit)

    async def get_recent_activities(self, limit: int = 10) -> list[Activity]:
        return merge_activities(
            await self._sales.list_sales(limit=limit),
            await self._repairs.list_repairs(limit=limit),
            await self._purchases.list_purchases(limit=limit),
            limit=limit,
        )

    async def get_low_stock_alerts(
        self,
        limit: int = 20,
        default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> tuple[int, list[LowStockAlert]]:
        """Threshold in force and the products below it, scarcest first."""
        profile = await self._settings.get_business_profile()
        threshold = profile.low_stock_threshold if profile else default_threshold

        products = await self._catalog.list_low_stock(threshold, limit=limit)
        if products:
            logger.info("low_stock_detected", threshold=threshold, count=len(products))
        return threshold, [
            LowStockAlert(
                id=p.id,
                name=p.name,
                current_stock=p.quantity,
                category=p.category_name,
                unit=p.unit_name,
            )
            for p in products
        ]
