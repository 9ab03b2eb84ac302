"""Monthly PDF report endpoints."""

from fastapi import APIRouter, Depends
from starlette.responses import Response

from repairshop.api.dependencies import get_monthly_report_use_case
from repairshop.application.dto.responses import ErrorResponse
from repairshop.application.use_cases.generate_monthly_report import (
    GenerateMonthlyReportUseCase,
    ReportResult,
)

router = APIRouter(prefix="/api/reports", tags=["reports"])

_PDF_RESPONSES = {
    200: {"content": {"application/pdf": {}}},
    400: {"model": ErrorResponse},
}


def _pdf_response(result: ReportResult) -> Response:
    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
        },
    )


@router.get("/sales/{year}/{month}", response_class=Response, responses=_PDF_RESPONSES)
async def sales_report(
    year: int,
    month: int,
    use_case: GenerateMonthlyReportUseCase = Depends(get_monthly_report_use_case),
) -> Response:
    """Download the month's sales report as PDF."""
    return _pdf_response(await use_case.sales_report(year, month))


@router.get("/repairs/{year}/{month}", response_class=Response, responses=_PDF_RESPONSES)
async def repairs_report(
    year: int,
    month: int,
    use_case: GenerateMonthlyReportUseCase = Depends(get_monthly_report_use_case),
) -> Response:
    """Download the month's repairs report as PDF."""
    return _pdf_response(await use_case.repairs_report(year, month))
