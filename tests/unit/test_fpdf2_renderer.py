"""Tests for the monthly report PDF renderer."""

import zlib
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest
from fpdf.errors import FPDFException

from repairshop.config.settings import PdfSettings
from repairshop.core.entities import BusinessProfile, Repair, RepairUsedPart, Sale, SaleItem
from repairshop.core.exceptions import ReportGenerationError
from repairshop.core.services.reports import RepairsReportData, SalesReportData
from repairshop.infrastructure.pdf import Fpdf2ReportRenderer


def _extract_pdf_text(pdf_bytes: bytes) -> str:
    """Inflate every content stream and join the results."""
    chunks = []
    pos = 0
    while True:
        start = pdf_bytes.find(b"stream", pos)
        if start == -1:
            break
        start = pdf_bytes.index(b"\n", start) + 1
        end = pdf_bytes.find(b"endstream", start)
        raw = pdf_bytes[start:end].rstrip(b"\r\n")
        try:
            chunks.append(zlib.decompress(raw).decode("latin-1"))
        except zlib.error:
            chunks.append(raw.decode("latin-1"))
        pos = end + len(b"endstream")
    return "\n".join(chunks)


@pytest.fixture
def renderer():
    return Fpdf2ReportRenderer(PdfSettings(currency_symbol="$", default_shop_name="Repair Shop"))


@pytest.fixture
def profile():
    return BusinessProfile(
        id=1,
        shop_name="Fix It Fast",
        address="12 Main St",
        phone_number="555-0199",
        contact_email="shop@example.com",
    )


def _sales_report() -> SalesReportData:
    return SalesReportData(
        year=2024,
        month=3,
        sales=[
            Sale(
                id=1,
                customer_id=1,
                customer_name="Alice Martin",
                created_at=datetime(2024, 3, 4, 10, 0),
                items=[
                    SaleItem(
                        product_id=1, product_name="iPhone 12 Screen", quantity=2,
                        price_at_time=Decimal("120"), cost_at_time=Decimal("80"),
                    )
                ],
            )
        ],
    )


class TestSalesReport:
    def test_renders_pdf(self, renderer, profile):
        data = renderer.render_sales(_sales_report(), profile)
        assert data.startswith(b"%PDF")

    def test_contains_header_and_rows(self, renderer, profile):
        text = _extract_pdf_text(renderer.render_sales(_sales_report(), profile))

        assert "Fix It Fast" in text
        assert "SALES REPORT - March 2024" in text
        assert "iPhone 12 Screen" in text
        assert "$240.00" in text

    def test_empty_month_without_profile(self, renderer):
        data = renderer.render_sales(SalesReportData(year=2024, month=1), None)
        text = _extract_pdf_text(data)

        assert data.startswith(b"%PDF")
        assert "Repair Shop" in text
        assert "No records for this period" in text

    def test_fpdf_failure_becomes_report_error(self, renderer, profile):
        with patch(
            "repairshop.infrastructure.pdf.report_renderer._ReportPdf.output",
            side_effect=FPDFException("boom"),
        ):
            with pytest.raises(ReportGenerationError) as exc_info:
                renderer.render_sales(_sales_report(), profile)
        assert exc_info.value.details["report"] == "sales"


class TestRepairsReport:
    def test_contains_totals(self, renderer, profile):
        report = RepairsReportData(
            year=2024,
            month=12,
            repairs=[
                Repair(
                    id=1,
                    customer_id=1,
                    customer_name="Alice Martin",
                    description="Screen replacement",
                    total_cost=Decimal("200"),
                    parts_cost=Decimal("80"),
                    labor_cost=Decimal("120"),
                    used_parts=[
                        RepairUsedPart(product_id=1, quantity=2, cost_at_time=Decimal("40"))
                    ],
                    created_at=datetime(2024, 12, 9),
                )
            ],
        )

        text = _extract_pdf_text(renderer.render_repairs(report, profile))

        assert "REPAIRS REPORT - December 2024" in text
        assert "Screen replacement" in text
        assert "Gross Profit:" in text
        assert "$120.00" in text


_FONT_CANDIDATES = [
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
    Path("/usr/share/fonts/dejavu/DejaVuSans.ttf"),
    Path("/usr/share/fonts/TTF/DejaVuSans.ttf"),
    Path("/Library/Fonts/DejaVuSans.ttf"),
]


@pytest.fixture
def unicode_font() -> Path:
    for candidate in _FONT_CANDIDATES:
        if candidate.is_file():
            return candidate
    pytest.skip("DejaVuSans.ttf not installed")


def _cyrillic_report() -> RepairsReportData:
    return RepairsReportData(
        year=2024,
        month=5,
        repairs=[
            Repair(
                id=1,
                customer_id=1,
                customer_name="Иван Петров",
                description="Замена экрана",
                total_cost=Decimal("150"),
                parts_cost=Decimal("50"),
                labor_cost=Decimal("100"),
                created_at=datetime(2024, 5, 2),
            )
        ],
    )


class TestUnicodeText:
    def test_builtin_font_replaces_non_latin(self, renderer):
        text = _extract_pdf_text(renderer.render_repairs(_cyrillic_report(), None))

        assert "????? ??????" in text
        assert "REPAIRS REPORT - May 2024" in text

    def test_configured_font_keeps_non_latin(self, unicode_font: Path):
        renderer = Fpdf2ReportRenderer(PdfSettings(font_path=unicode_font))
        profile = BusinessProfile(id=1, shop_name="Мастерская")

        data = renderer.render_repairs(_cyrillic_report(), profile)

        assert data.startswith(b"%PDF")
        assert b"/FontFile2" in data
        assert b"DejaVuSans" in data
        assert "?????? ??????" not in _extract_pdf_text(data)

    def test_missing_font_falls_back_to_helvetica(self, tmp_path: Path):
        renderer = Fpdf2ReportRenderer(PdfSettings(font_path=tmp_path / "absent.ttf"))

        data = renderer.render_repairs(_cyrillic_report(), None)

        assert b"/FontFile2" not in data
        assert "????? ??????" in _extract_pdf_text(data)
