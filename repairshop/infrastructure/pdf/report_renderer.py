"""
Monthly report PDF renderer using fpdf2.

Renders the sales and repairs reports with the shop's business profile in
the header, a bordered table with alternating row shading, a totals block
and a page-numbered footer.
"""

from datetime import datetime
from decimal import Decimal

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException

from repairshop.config import get_logger
from repairshop.config.settings import PdfSettings, get_settings
from repairshop.core.entities.business_profile import BusinessProfile
from repairshop.core.exceptions import ReportGenerationError
from repairshop.core.money import format_money
from repairshop.core.services.reports import (
    IReportRenderer,
    RepairsReportData,
    SalesReportData,
)

logger = get_logger(__name__)

_UNICODE_FAMILY = "ReportFont"

_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def _latin1(text: str) -> str:
    """Built-in PDF fonts are Latin-1 only; anything else prints as '?'."""
    return text.encode("latin-1", "replace").decode("latin-1")


class _ReportPdf(FPDF):
    """
    FPDF subclass with a page footer and an optional Unicode font.

    When ``PdfSettings.font_path`` points at a readable TTF it is registered
    as ``ReportFont`` and all text is written as-is. Otherwise the built-in
    Helvetica is used and text outside Latin-1 prints as '?'.
    """

    def __init__(self, pdf_settings: PdfSettings) -> None:
        super().__init__()
        self._pdf_settings = pdf_settings
        self._generation_date = datetime.now().strftime("%Y-%m-%d %H:%M")
        self.report_family = "Helvetica"
        self.has_unicode_font = self._load_unicode_font()

    def _load_unicode_font(self) -> bool:
        regular = self._pdf_settings.font_path
        if regular is None:
            return False
        if not regular.is_file():
            logger.warning("report_font_missing", font_path=str(regular))
            return False
        bold = self._pdf_settings.bold_font_path
        if bold is None or not bold.is_file():
            bold = regular
        try:
            self.add_font(_UNICODE_FAMILY, "", str(regular))
            self.add_font(_UNICODE_FAMILY, "B", str(bold))
            self.add_font(_UNICODE_FAMILY, "I", str(regular))
        except (OSError, FPDFException) as e:
            logger.warning("report_font_unusable", font_path=str(regular), error=str(e))
            return False
        self.report_family = _UNICODE_FAMILY
        return True

    def text_for_font(self, text: str) -> str:
        return text if self.has_unicode_font else _latin1(text)

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font(self.report_family, "I", 8)
        self.cell(0, 5, self.text_for_font(self._pdf_settings.footer_text), align="L")
        self.set_x(-60)
        self.cell(
            0,
            5,
            f"Page {self.page_no()} of {{nb}} | {self._generation_date}",
            align="R",
        )


class Fpdf2ReportRenderer(IReportRenderer):
    """Renders monthly sales and repairs reports using fpdf2."""

    def __init__(self, pdf_settings: PdfSettings | None = None) -> None:
        if pdf_settings is None:
            pdf_settings = get_settings().pdf
        self._settings = pdf_settings

    def render_sales(
        self, report: SalesReportData, profile: BusinessProfile | None
    ) -> bytes:
        """Render a month of sales, one row per sale line."""
        headers = ["Date", "Customer", "Product", "Qty", "Unit Price", "Total"]
        widths = [24, 38, 56, 14, 28, 30]

        rows: list[list[str]] = []
        for sale in sorted(report.sales, key=lambda s: s.created_at):
            for item in sale.items:
                rows.append([
                    sale.created_at.strftime("%Y-%m-%d"),
                    (sale.customer_name or "")[:22],
                    (item.product_name or "")[:32],
                    str(item.quantity),
                    self._money(item.price_at_time),
                    self._money(item.line_revenue),
                ])

        totals = [
            ("Total Transactions:", str(report.total_transactions)),
            ("Total Revenue:", self._money(report.total_revenue)),
        ]
        return self._render(
            "sales",
            f"SALES REPORT - {_MONTHS[report.month - 1]} {report.year}",
            profile,
            headers,
            widths,
            rows,
            totals,
        )

    def render_repairs(
        self, report: RepairsReportData, profile: BusinessProfile | None
    ) -> bytes:
        """Render a month of repairs with parts cost and labor."""
        headers = ["Date", "Customer", "Description", "Charged", "Parts", "Labor"]
        widths = [24, 38, 58, 24, 23, 23]

        rows = [
            [
                repair.created_at.strftime("%Y-%m-%d"),
                (repair.customer_name or "")[:22],
                repair.description[:34],
                self._money(repair.total_cost),
                self._money(repair.parts_cost),
                self._money(repair.labor_cost),
            ]
            for repair in sorted(report.repairs, key=lambda r: r.created_at)
        ]

        totals = [
            ("Total Repairs:", str(report.total_repairs)),
            ("Total Revenue:", self._money(report.total_revenue)),
            ("Total Parts Cost:", self._money(report.total_parts_cost)),
            ("Gross Profit:", self._money(report.gross_profit)),
        ]
        return self._render(
            "repairs",
            f"REPAIRS REPORT - {_MONTHS[report.month - 1]} {report.year}",
            profile,
            headers,
            widths,
            rows,
            totals,
        )

    def _money(self, value: Decimal) -> str:
        return format_money(value, self._settings.currency_symbol)

    def _render(
        self,
        kind: str,
        title: str,
        profile: BusinessProfile | None,
        headers: list[str],
        widths: list[int],
        rows: list[list[str]],
        totals: list[tuple[str, str]],
    ) -> bytes:
        try:
            pdf = _ReportPdf(self._settings)
            pdf.alias_nb_pages()
            pdf.set_auto_page_break(auto=True, margin=20)
            pdf.add_page()

            self._render_header(pdf, profile, title)
            self._render_separator(pdf)
            self._render_table(pdf, headers, widths, rows)
            self._render_totals(pdf, totals)

            data = bytes(pdf.output())
        except FPDFException as e:
            logger.error("report_render_failed", report=kind, error=str(e))
            raise ReportGenerationError(kind, str(e)) from e

        logger.info("report_rendered", report=kind, rows=len(rows), size=len(data))
        return data

    def _render_header(
        self, pdf: _ReportPdf, profile: BusinessProfile | None, title: str
    ) -> None:
        """Shop name and contact lines, then the report title."""
        shop_name = profile.shop_name if profile else self._settings.default_shop_name

        pdf.set_font(pdf.report_family, "B", 14)
        pdf.cell(0, 7, pdf.text_for_font(shop_name), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_font(pdf.report_family, "", 9)
        if profile:
            contact = [
                profile.address,
                f"Tel: {profile.phone_number}" if profile.phone_number else None,
                f"Email: {profile.contact_email}" if profile.contact_email else None,
            ]
            for line in contact:
                if line:
                    pdf.cell(0, 5, pdf.text_for_font(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.ln(4)
        pdf.set_font(pdf.report_family, "B", 16)
        pdf.cell(0, 10, title, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(2)

    @staticmethod
    def _render_separator(pdf: _ReportPdf) -> None:
        y = pdf.get_y()
        pdf.set_draw_color(100, 100, 100)
        pdf.line(10, y, 200, y)
        pdf.set_draw_color(0, 0, 0)
        pdf.ln(4)

    @staticmethod
    def _render_table(
        pdf: _ReportPdf, headers: list[str], widths: list[int], rows: list[list[str]]
    ) -> None:
        """Bordered table; the first three columns are text, the rest right-aligned."""
        pdf.set_font(pdf.report_family, "B", 9)
        pdf.set_fill_color(70, 70, 70)
        pdf.set_text_color(255, 255, 255)
        for header, width in zip(headers, widths):
            pdf.cell(width, 7, header, border=1, fill=True, align="C")
        pdf.ln()
        pdf.set_text_color(0, 0, 0)

        pdf.set_font(pdf.report_family, "", 8)
        if not rows:
            pdf.cell(sum(widths), 6, "No records for this period", border=1, align="C")
            pdf.ln()

        for idx, row in enumerate(rows, 1):
            fill = idx % 2 == 0
            if fill:
                pdf.set_fill_color(240, 240, 240)
            for col, (value, width) in enumerate(zip(row, widths)):
                pdf.cell(
                    width, 6, pdf.text_for_font(value), border=1,
                    align="L" if col < 3 else "R", fill=fill,
                )
            pdf.ln()

        pdf.ln(3)

    @staticmethod
    def _render_totals(pdf: _ReportPdf, totals: list[tuple[str, str]]) -> None:
        pdf.set_font(pdf.report_family, "B", 10)
        pdf.cell(0, 7, "Summary", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        for label, value in totals:
            pdf.set_font(pdf.report_family, "", 10)
            pdf.cell(120, 6, label, align="R")
            pdf.set_font(pdf.report_family, "B", 10)
            pdf.cell(0, 6, pdf.text_for_font(value), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
