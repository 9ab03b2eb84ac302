"""Sales endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from repairshop.api.dependencies import get_create_sale_use_case, get_sales
from repairshop.application.dto.requests import CreateSaleRequest
from repairshop.application.dto.responses import ErrorResponse, SaleResponse
from repairshop.application.use_cases.create_sale import CreateSaleUseCase
from repairshop.core.exceptions import SaleNotFoundError
from repairshop.core.interfaces.sales_store import ISalesStore

router = APIRouter(prefix="/api/sales", tags=["sales"])


@router.post(
    "",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_sale(
    request: CreateSaleRequest,
    use_case: CreateSaleUseCase = Depends(get_create_sale_use_case),
) -> SaleResponse:
    """Sell products. Nothing is written if any line cannot be filled."""
    sale = await use_case.execute(request)
    return use_case.to_response(sale)


@router.get("", response_model=list[SaleResponse])
async def list_sales(
    customer_id: int | None = None,
    since: datetime | None = None,
    until: datetime | None = None,
    limit: int | None = Query(default=None, ge=1, le=1000),
    store: ISalesStore = Depends(get_sales),
) -> list[SaleResponse]:
    """List sales with their items, newest first."""
    sales = await store.list_sales(
        customer_id=customer_id, since=since, until=until, limit=limit
    )
    return [SaleResponse.from_entity(s) for s in sales]


@router.get(
    "/{sale_id}",
    response_model=SaleResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_sale(
    sale_id: int,
    store: ISalesStore = Depends(get_sales),
) -> SaleResponse:
    sale = await store.get_sale(sale_id)
    if sale is None:
        raise SaleNotFoundError(sale_id)
    return SaleResponse.from_entity(sale)
