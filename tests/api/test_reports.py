"""API tests for monthly PDF reports."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest
from httpx import AsyncClient

from repairshop.api.dependencies import get_monthly_report_use_case
from repairshop.api.main import app
from repairshop.application.use_cases.generate_monthly_report import (
    GenerateMonthlyReportUseCase,
    ReportResult,
)
from repairshop.core.exceptions import InvalidArgumentError


@pytest.fixture
def mock_report_uc():
    uc = Mock(spec=GenerateMonthlyReportUseCase)
    uc.sales_report = AsyncMock(
        return_value=ReportResult(
            filename="sales-report-2024-03.pdf",
            pdf_bytes=b"%PDF-1.4 fake",
            total_records=1,
            total_revenue=Decimal("240"),
        )
    )
    uc.repairs_report = AsyncMock(
        side_effect=InvalidArgumentError("month", "must be between 1 and 12", 13)
    )
    return uc


class TestReportsAPI:
    async def test_sales_report_headers(self, mock_client: AsyncClient, mock_report_uc):
        app.dependency_overrides[get_monthly_report_use_case] = lambda: mock_report_uc

        response = await mock_client.get("/api/reports/sales/2024/3")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="sales-report-2024-03.pdf"'
        )
        assert response.content == b"%PDF-1.4 fake"
        mock_report_uc.sales_report.assert_awaited_once_with(2024, 3)

    async def test_invalid_month_is_bad_request(self, mock_client: AsyncClient, mock_report_uc):
        app.dependency_overrides[get_monthly_report_use_case] = lambda: mock_report_uc

        response = await mock_client.get("/api/reports/repairs/2024/13")

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "INVALID_ARGUMENT"
        assert body["detail"] == "must be between 1 and 12"

    async def test_real_sales_report(self, api_client: AsyncClient, seeded, receive, sell):
        await receive(seeded.screen_id, 5, "80.00")
        await sell(seeded.customer_id, (seeded.screen_id, 1), sale_date=datetime(2024, 3, 15))

        response = await api_client.get("/api/reports/sales/2024/3")

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")

    async def test_real_repairs_report_empty_month(self, api_client: AsyncClient):
        response = await api_client.get("/api/reports/repairs/2024/1")

        assert response.status_code == 200
        assert 'filename="repairs-report-2024-01.pdf"' in response.headers["content-disposition"]
