"""Repair endpoints."""

from fastapi import APIRouter, Depends, status

from repairshop.api.dependencies import get_create_repair_use_case, get_repairs
from repairshop.application.dto.requests import CreateRepairRequest
from repairshop.application.dto.responses import (
    ErrorResponse,
    RepairAnalyticsResponse,
    RepairResponse,
)
from repairshop.application.use_cases.create_repair import CreateRepairUseCase
from repairshop.core.exceptions import RepairNotFoundError
from repairshop.core.interfaces.repair_store import IRepairStore
from repairshop.core.services.dashboard import (
    RepairDateRange,
    repair_analytics,
    repair_range_start,
)

router = APIRouter(prefix="/api/repairs", tags=["repairs"])


@router.post(
    "",
    response_model=RepairResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_repair(
    request: CreateRepairRequest,
    use_case: CreateRepairUseCase = Depends(get_create_repair_use_case),
) -> RepairResponse:
    """Record a repair. Labor is whatever the price leaves after parts."""
    repair = await use_case.execute(request)
    return use_case.to_response(repair)


@router.get("", response_model=list[RepairResponse])
async def list_repairs(
    date_range: RepairDateRange | None = None,
    customer_id: int | None = None,
    store: IRepairStore = Depends(get_repairs),
) -> list[RepairResponse]:
    """List repairs with their parts, newest first."""
    since = repair_range_start(date_range) if date_range else None
    repairs = await store.list_repairs(customer_id=customer_id, since=since)
    return [RepairResponse.from_entity(r) for r in repairs]


@router.get("/analytics", response_model=RepairAnalyticsResponse)
async def get_repair_analytics(
    date_range: RepairDateRange | None = None,
    store: IRepairStore = Depends(get_repairs),
) -> RepairAnalyticsResponse:
    """Repair count, revenue, average ticket, labor and parts totals."""
    since = repair_range_start(date_range) if date_range else None
    analytics = repair_analytics(await store.list_repairs(since=since))
    return RepairAnalyticsResponse(
        total_repairs=analytics.total_repairs,
        total_revenue=analytics.total_revenue,
        average_repair_cost=analytics.average_repair_cost,
        total_labor_revenue=analytics.total_labor_revenue,
        total_parts_cost=analytics.total_parts_cost,
    )


@router.get(
    "/{repair_id}",
    response_model=RepairResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_repair(
    repair_id: int,
    store: IRepairStore = Depends(get_repairs),
) -> RepairResponse:
    repair = await store.get_repair(repair_id)
    if repair is None:
        raise RepairNotFoundError(repair_id)
    return RepairResponse.from_entity(repair)
