"""
Generate Monthly Report Use Case.

Builds the month's sales or repairs report and renders it to PDF.
"""

from dataclasses import dataclass
from decimal import Decimal

from repairshop.config import get_logger
from repairshop.core.interfaces.repair_store import IRepairStore
from repairshop.core.interfaces.sales_store import ISalesStore
from repairshop.core.interfaces.settings_store import ISettingsStore
from repairshop.core.services.reports import (
    IReportRenderer,
    RepairsReportData,
    SalesReportData,
    month_bounds,
)

logger = get_logger(__name__)


@dataclass
class ReportResult:
    """Rendered PDF plus the headline figures shown in it."""

    filename: str
    pdf_bytes: bytes
    total_records: int
    total_revenue: Decimal
    total_parts_cost: Decimal | None = None
    gross_profit: Decimal | None = None


class GenerateMonthlyReportUseCase:
    """
    Use case for monthly PDF reports.

    Flow:
    1. Validate month/year and compute the month window
    2. Load the month's sales or repairs and the business profile
    3. Render PDF via the report renderer
    """

    def __init__(
        self,
        sales_store: ISalesStore | None = None,
        repair_store: IRepairStore | None = None,
        settings_store: ISettingsStore | None = None,
        renderer: IReportRenderer | None = None,
    ):
        self._sales_store = sales_store
        self._repair_store = repair_store
        self._settings_store = settings_store
        self._renderer = renderer

    def _get_renderer(self) -> IReportRenderer:
        if self._renderer is None:
            from repairshop.infrastructure.pdf import Fpdf2ReportRenderer

            self._renderer = Fpdf2ReportRenderer()
        return self._renderer

    async def _get_settings_store(self) -> ISettingsStore:
        if self._settings_store is None:
            from repairshop.infrastructure.storage.sqlite import get_settings_store

            self._settings_store = await get_settings_store()
        return self._settings_store

    async def sales_report(self, year: int, month: int) -> ReportResult:
        """Render the sales report for one calendar month."""
        start, end = month_bounds(year, month)
        if self._sales_store is None:
            from repairshop.infrastructure.storage.sqlite import get_sales_store

            self._sales_store = await get_sales_store()

        report = SalesReportData(
            year=year,
            month=month,
            sales=await self._sales_store.list_sales(since=start, until=end),
        )
        profile = await (await self._get_settings_store()).get_business_profile()
        pdf_bytes = self._get_renderer().render_sales(report, profile)

        logger.info(
            "sales_report_generated",
            year=year,
            month=month,
            transactions=report.total_transactions,
            size=len(pdf_bytes),
        )
        return ReportResult(
            filename=report.filename,
            pdf_bytes=pdf_bytes,
            total_records=report.total_transactions,
            total_revenue=report.total_revenue,
        )

    async def repairs_report(self, year: int, month: int) -> ReportResult:
        """Render the repairs report for one calendar month."""
        start, end = month_bounds(year, month)
        if self._repair_store is None:
            from repairshop.infrastructure.storage.sqlite import get_repair_store

            self._repair_store = await get_repair_store()

        report = RepairsReportData(
            year=year,
            month=month,
            repairs=await self._repair_store.list_repairs(since=start, until=end),
        )
        profile = await (await self._get_settings_store()).get_business_profile()
        pdf_bytes = self._get_renderer().render_repairs(report, profile)

        logger.info(
            "repairs_report_generated",
            year=year,
            month=month,
            repairs=report.total_repairs,
            size=len(pdf_bytes),
        )
        return ReportResult(
            filename=report.filename,
            pdf_bytes=pdf_bytes,
            total_records=report.total_repairs,
            total_revenue=report.total_revenue,
            total_parts_cost=report.total_parts_cost,
            gross_profit=report.gross_profit,
        )
