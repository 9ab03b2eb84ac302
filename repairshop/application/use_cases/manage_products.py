"""Manage Products Use Case: catalog edits that must check references."""

from repairshop.application.dto.requests import ProductRequest
from repairshop.application.dto.responses import StockValueResponse
from repairshop.config import get_logger
from repairshop.core.entities.catalog import Product
from repairshop.core.exceptions import (
    CategoryNotFoundError,
    ProductNotFoundError,
    UnitNotFoundError,
)
from repairshop.core.interfaces.catalog_store import ICatalogStore
from repairshop.core.money import ZERO

logger = get_logger(__name__)


class ManageProductsUseCase:
    """Create, update and value products.

    Descriptive fields only: quantity and average cost are never accepted
    from a request.
    """

    def __init__(self, catalog_store: ICatalogStore | None = None):
        self._catalog_store = catalog_store

    async def _get_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from repairshop.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def _check_references(self, store: ICatalogStore, request: ProductRequest) -> None:
        if await store.get_category(request.category_id) is None:
            raise CategoryNotFoundError(request.category_id)
        if await store.get_unit(request.unit_id) is None:
            raise UnitNotFoundError(request.unit_id)

    async def create(self, request: ProductRequest) -> Product:
        store = await self._get_store()
        await self._check_references(store, request)
        return await store.create_product(
            Product(
                name=request.name,
                category_id=request.category_id,
                unit_id=request.unit_id,
                sale_price=request.sale_price,
            )
        )

    async def update(self, product_id: int, request: ProductRequest) -> Product:
        store = await self._get_store()
        existing = await store.get_product(product_id)
        if existing is None:
            raise ProductNotFoundError(product_id)
        await self._check_references(store, request)

        existing.name = request.name
        existing.category_id = request.category_id
        existing.unit_id = request.unit_id
        existing.sale_price = request.sale_price
        return await store.update_product(existing)

    async def total_value(self) -> StockValueResponse:
        """Sum of quantity x average cost across all products."""
        store = await self._get_store()
        products = await store.list_products()
        total = sum((p.stock_value for p in products), ZERO)
        logger.debug("stock_value_computed", products=len(products), total=str(total))
        return StockValueResponse(total_value=total, product_count=len(products))
