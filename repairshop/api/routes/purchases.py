"""Purchase (stock receipt) endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from repairshop.api.dependencies import get_purchases, get_record_purchase_use_case
from repairshop.application.dto.requests import CreatePurchaseRequest
from repairshop.application.dto.responses import (
    ErrorResponse,
    PurchaseResponse,
    RecordPurchaseResponse,
)
from repairshop.application.use_cases.record_purchase import RecordPurchaseUseCase
from repairshop.core.interfaces.purchase_store import IPurchaseStore

router = APIRouter(prefix="/api/purchases", tags=["purchases"])


@router.post(
    "",
    response_model=RecordPurchaseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_purchase(
    request: CreatePurchaseRequest,
    use_case: RecordPurchaseUseCase = Depends(get_record_purchase_use_case),
) -> RecordPurchaseResponse:
    """Receive stock and re-average the product's cost."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=list[PurchaseResponse])
async def list_purchases(
    product_id: int | None = None,
    since: datetime | None = None,
    until: datetime | None = None,
    limit: int | None = Query(default=None, ge=1, le=1000),
    store: IPurchaseStore = Depends(get_purchases),
) -> list[PurchaseResponse]:
    """List purchases, newest first."""
    records = await store.list_purchases(
        product_id=product_id, since=since, until=until, limit=limit
    )
    return [PurchaseResponse.from_entity(r) for r in records]
