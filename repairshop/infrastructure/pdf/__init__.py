"""PDF generation infrastructure."""

from repairshop.infrastructure.pdf.report_renderer import Fpdf2ReportRenderer

__all__ = ["Fpdf2ReportRenderer"]
