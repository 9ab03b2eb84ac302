"""Tests for GenerateMonthlyReportUseCase."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from repairshop.application.use_cases.generate_monthly_report import (
    GenerateMonthlyReportUseCase,
)
from repairshop.core.entities import BusinessProfile, Repair, Sale
from repairshop.core.exceptions import InvalidArgumentError
from repairshop.core.services.reports import IReportRenderer


@pytest.fixture
def renderer():
    mock = MagicMock(spec=IReportRenderer)
    mock.render_sales.return_value = b"%PDF-sales"
    mock.render_repairs.return_value = b"%PDF-repairs"
    return mock


@pytest.fixture
def settings_store():
    mock = AsyncMock()
    mock.get_business_profile.return_value = BusinessProfile(id=1, shop_name="Fix It")
    return mock


class TestGenerateMonthlyReport:
    async def test_sales_report(self, renderer, settings_store):
        sales_store = AsyncMock()
        sales_store.list_sales.return_value = [
            Sale(id=1, customer_id=1, total_amount=Decimal("100"), total_cost=Decimal("40"))
        ]
        use_case = GenerateMonthlyReportUseCase(
            sales_store=sales_store, settings_store=settings_store, renderer=renderer
        )

        result = await use_case.sales_report(2024, 2)

        sales_store.list_sales.assert_awaited_once_with(
            since=datetime(2024, 2, 1), until=datetime(2024, 3, 1)
        )
        assert result.filename == "sales-report-2024-02.pdf"
        assert result.pdf_bytes == b"%PDF-sales"
        assert result.total_records == 1
        assert result.total_revenue == Decimal("100")
        report, profile = renderer.render_sales.call_args[0]
        assert profile.shop_name == "Fix It"
        assert report.month == 2

    async def test_repairs_report(self, renderer, settings_store):
        repair_store = AsyncMock()
        repair_store.list_repairs.return_value = [
            Repair(
                id=1, customer_id=1, description="Fix", total_cost=Decimal("200"),
                parts_cost=Decimal("80"), labor_cost=Decimal("120"),
            )
        ]
        use_case = GenerateMonthlyReportUseCase(
            repair_store=repair_store, settings_store=settings_store, renderer=renderer
        )

        result = await use_case.repairs_report(2024, 12)

        assert result.filename == "repairs-report-2024-12.pdf"
        assert result.total_parts_cost == Decimal("80")
        assert result.gross_profit == Decimal("120")

    async def test_invalid_month_rejected_before_loading(self, renderer, settings_store):
        sales_store = AsyncMock()
        use_case = GenerateMonthlyReportUseCase(
            sales_store=sales_store, settings_store=settings_store, renderer=renderer
        )

        with pytest.raises(InvalidArgumentError):
            await use_case.sales_report(2024, 13)
        sales_store.list_sales.assert_not_awaited()
        renderer.render_sales.assert_not_called()
