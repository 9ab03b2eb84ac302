"""Customer endpoints."""

from fastapi import APIRouter, Depends, status

from repairshop.api.dependencies import get_customer_history_use_case, get_customers
from repairshop.application.dto.requests import CustomerRequest
from repairshop.application.dto.responses import (
    CustomerHistoryResponse,
    CustomerResponse,
    ErrorResponse,
)
from repairshop.application.use_cases.customer_history import GetCustomerHistoryUseCase
from repairshop.core.entities.customer import Customer
from repairshop.core.exceptions import CustomerNotFoundError
from repairshop.core.interfaces.customer_store import ICustomerStore

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    store: ICustomerStore = Depends(get_customers),
) -> list[CustomerResponse]:
    """List customers, newest first."""
    return [CustomerResponse.from_entity(c) for c in await store.list_customers()]


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_customer(
    customer_id: int,
    store: ICustomerStore = Depends(get_customers),
) -> CustomerResponse:
    customer = await store.get_customer(customer_id)
    if customer is None:
        raise CustomerNotFoundError(customer_id)
    return CustomerResponse.from_entity(customer)


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    request: CustomerRequest,
    store: ICustomerStore = Depends(get_customers),
) -> CustomerResponse:
    customer = await store.create_customer(
        Customer(name=request.name, phone=request.phone, address=request.address)
    )
    return CustomerResponse.from_entity(customer)


@router.put(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_customer(
    customer_id: int,
    request: CustomerRequest,
    store: ICustomerStore = Depends(get_customers),
) -> CustomerResponse:
    customer = await store.update_customer(
        Customer(
            id=customer_id,
            name=request.name,
            phone=request.phone,
            address=request.address,
        )
    )
    return CustomerResponse.from_entity(customer)


@router.get(
    "/{customer_id}/history",
    response_model=CustomerHistoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_customer_history(
    customer_id: int,
    use_case: GetCustomerHistoryUseCase = Depends(get_customer_history_use_case),
) -> CustomerHistoryResponse:
    """Every sale and repair on record for the customer."""
    history = await use_case.execute(customer_id)
    return use_case.to_response(history)
