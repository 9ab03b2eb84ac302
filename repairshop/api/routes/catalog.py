"""Catalog endpoints: categories and units of measure."""

from fastapi import APIRouter, Depends, status

from repairshop.api.dependencies import get_catalog
from repairshop.application.dto.requests import CategoryRequest, UnitRequest
from repairshop.application.dto.responses import (
    CategoryResponse,
    ErrorResponse,
    UnitResponse,
)
from repairshop.core.entities.catalog import Category, Unit
from repairshop.core.exceptions import CategoryNotFoundError, UnitNotFoundError
from repairshop.core.interfaces.catalog_store import ICatalogStore

categories_router = APIRouter(prefix="/api/categories", tags=["catalog"])
units_router = APIRouter(prefix="/api/units", tags=["catalog"])


# Categories


@categories_router.get("", response_model=list[CategoryResponse])
async def list_categories(
    store: ICatalogStore = Depends(get_catalog),
) -> list[CategoryResponse]:
    """List categories with their product counts."""
    return [CategoryResponse.from_entity(c) for c in await store.list_categories()]


@categories_router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_category(
    category_id: int,
    store: ICatalogStore = Depends(get_catalog),
) -> CategoryResponse:
    category = await store.get_category(category_id)
    if category is None:
        raise CategoryNotFoundError(category_id)
    return CategoryResponse.from_entity(category)


@categories_router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_category(
    request: CategoryRequest,
    store: ICatalogStore = Depends(get_catalog),
) -> CategoryResponse:
    category = await store.create_category(Category(name=request.name))
    return CategoryResponse.from_entity(category)


@categories_router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_category(
    category_id: int,
    request: CategoryRequest,
    store: ICatalogStore = Depends(get_catalog),
) -> CategoryResponse:
    category = await store.update_category(Category(id=category_id, name=request.name))
    return CategoryResponse.from_entity(category)


@categories_router.delete(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}},
)
async def delete_category(
    category_id: int,
    store: ICatalogStore = Depends(get_catalog),
) -> CategoryResponse:
    """Delete a category that no product uses."""
    return CategoryResponse.from_entity(await store.delete_category(category_id))


# Units


@units_router.get("", response_model=list[UnitResponse])
async def list_units(
    store: ICatalogStore = Depends(get_catalog),
) -> list[UnitResponse]:
    return [UnitResponse.from_entity(u) for u in await store.list_units()]


@units_router.get(
    "/{unit_id}",
    response_model=UnitResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_unit(
    unit_id: int,
    store: ICatalogStore = Depends(get_catalog),
) -> UnitResponse:
    unit = await store.get_unit(unit_id)
    if unit is None:
        raise UnitNotFoundError(unit_id)
    return UnitResponse.from_entity(unit)


@units_router.post(
    "",
    response_model=UnitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_unit(
    request: UnitRequest,
    store: ICatalogStore = Depends(get_catalog),
) -> UnitResponse:
    return UnitResponse.from_entity(await store.create_unit(Unit(name=request.name)))


@units_router.put(
    "/{unit_id}",
    response_model=UnitResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_unit(
    unit_id: int,
    request: UnitRequest,
    store: ICatalogStore = Depends(get_catalog),
) -> UnitResponse:
    unit = await store.update_unit(Unit(id=unit_id, name=request.name))
    return UnitResponse.from_entity(unit)


@units_router.delete(
    "/{unit_id}",
    response_model=UnitResponse,
    responses={404: {"model": ErrorResponse}, 412: {"model": ErrorResponse}},
)
async def delete_unit(
    unit_id: int,
    store: ICatalogStore = Depends(get_catalog),
) -> UnitResponse:
    """Delete a unit that no product uses."""
    return UnitResponse.from_entity(await store.delete_unit(unit_id))
