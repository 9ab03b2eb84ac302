"""Dashboard endpoints."""

from fastapi import APIRouter, Depends, Query

from repairshop.api.dependencies import get_app_settings, get_dashboard
from repairshop.application.dto.responses import (
    ActivityResponse,
    DashboardSummaryResponse,
    LowStockAlertsResponse,
    LowStockProductResponse,
    RecentActivitiesResponse,
    TopProductResponse,
    TopProductsResponse,
    TrendPointResponse,
    TrendResponse,
)
from repairshop.config import Settings
from repairshop.core.services.dashboard import DashboardPeriod, DashboardService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummaryResponse)
async def get_summary(
    period: DashboardPeriod = Query(...),
    service: DashboardService = Depends(get_dashboard),
) -> DashboardSummaryResponse:
    """Income, expenses and profit for the period, plus current stock value."""
    summary = await service.get_summary(period)
    return DashboardSummaryResponse(
        period=period.value,
        total_expenses=summary.total_expenses,
        total_sales_income=summary.total_sales_income,
        total_repair_income=summary.total_repair_income,
        sales_profit=summary.sales_profit,
        repair_profit=summary.repair_profit,
        total_stock_value=summary.total_stock_value,
        gross_profit=summary.gross_profit,
    )


@router.get("/trend", response_model=TrendResponse)
async def get_trend(
    service: DashboardService = Depends(get_dashboard),
    settings: Settings = Depends(get_app_settings),
) -> TrendResponse:
    """Daily income and expenses, oldest day first."""
    points = await service.get_trend(days=settings.inventory.trend_days)
    return TrendResponse(
        trend_data=[
            TrendPointResponse(
                date=p.day,
                total_income=p.total_income,
                total_expenses=p.total_expenses,
            )
            for p in points
        ]
    )


@router.get("/top-products", response_model=TopProductsResponse)
async def get_top_products(
    period: DashboardPeriod = Query(...),
    service: DashboardService = Depends(get_dashboard),
    settings: Settings = Depends(get_app_settings),
) -> TopProductsResponse:
    products = await service.get_top_products(
        period, limit=settings.inventory.top_products_limit
    )
    return TopProductsResponse(
        top_products=[
            TopProductResponse(
                product_id=p.product_id,
                product_name=p.product_name,
                total_sales=p.total_sales,
                total_revenue=p.total_revenue,
            )
            for p in products
        ]
    )


@router.get("/recent-activities", response_model=RecentActivitiesResponse)
async def get_recent_activities(
    service: DashboardService = Depends(get_dashboard),
    settings: Settings = Depends(get_app_settings),
) -> RecentActivitiesResponse:
    """Latest sales, repairs and purchases merged into one feed."""
    activities = await service.get_recent_activities(
        limit=settings.inventory.recent_activity_limit
    )
    return RecentActivitiesResponse(
        activities=[
            ActivityResponse(
                id=a.id,
                type=a.type,
                description=a.description,
                amount=a.amount,
                customer_name=a.customer_name,
                date=a.date,
            )
            for a in activities
        ]
    )


@router.get("/low-stock", response_model=LowStockAlertsResponse)
async def get_low_stock_alerts(
    service: DashboardService = Depends(get_dashboard),
    settings: Settings = Depends(get_app_settings),
) -> LowStockAlertsResponse:
    threshold, alerts = await service.get_low_stock_alerts(
        limit=settings.inventory.low_stock_alert_limit,
        default_threshold=settings.inventory.default_low_stock_threshold,
    )
    return LowStockAlertsResponse(
        threshold=threshold,
        low_stock_products=[
            LowStockProductResponse(
                id=a.id,
                name=a.name,
                current_stock=a.current_stock,
                category=a.category,
                unit=a.unit,
            )
            for a in alerts
        ],
    )
