"""Product endpoints."""

from fastapi import APIRouter, Depends, status

from repairshop.api.dependencies import (
    get_catalog,
    get_manage_products_use_case,
    get_purchases,
)
from repairshop.application.dto.requests import ProductRequest
from repairshop.application.dto.responses import (
    ErrorResponse,
    ProductResponse,
    PurchaseResponse,
    StockValueResponse,
)
from repairshop.application.use_cases.manage_products import ManageProductsUseCase
from repairshop.core.exceptions import ProductNotFoundError
from repairshop.core.interfaces.catalog_store import ICatalogStore
from repairshop.core.interfaces.purchase_store import IPurchaseStore

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(
    store: ICatalogStore = Depends(get_catalog),
) -> list[ProductResponse]:
    """List products by name with category and unit names."""
    return [ProductResponse.from_entity(p) for p in await store.list_products()]


@router.get("/total-value", response_model=StockValueResponse)
async def get_total_value(
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> StockValueResponse:
    """Value of everything on hand at average cost."""
    return await use_case.total_value()


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    store: ICatalogStore = Depends(get_catalog),
) -> ProductResponse:
    product = await store.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return ProductResponse.from_entity(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_product(
    request: ProductRequest,
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductResponse:
    """Create a product with zero stock."""
    return ProductResponse.from_entity(await use_case.create(request))


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_product(
    product_id: int,
    request: ProductRequest,
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductResponse:
    """Update name, sale price, category and unit."""
    return ProductResponse.from_entity(await use_case.update(product_id, request))


@router.delete(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: int,
    store: ICatalogStore = Depends(get_catalog),
) -> ProductResponse:
    """Delete a product with no stock movement history."""
    return ProductResponse.from_entity(await store.delete_product(product_id))


@router.get(
    "/{product_id}/purchases",
    response_model=list[PurchaseResponse],
    responses={404: {"model": ErrorResponse}},
)
async def list_product_purchases(
    product_id: int,
    catalog: ICatalogStore = Depends(get_catalog),
    purchases: IPurchaseStore = Depends(get_purchases),
) -> list[PurchaseResponse]:
    """Purchase history of one product, newest first."""
    if await catalog.get_product(product_id) is None:
        raise ProductNotFoundError(product_id)
    records = await purchases.list_purchases(product_id=product_id)
    return [PurchaseResponse.from_entity(r) for r in records]
