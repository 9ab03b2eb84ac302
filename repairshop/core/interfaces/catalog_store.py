"""Abstract interface for catalog storage (categories, units, products)."""

from abc import ABC, abstractmethod

from repairshop.core.entities.catalog import Category, Product, Unit


class ICatalogStore(ABC):
    """Interface for category, unit and product persistence.

    Never writes product ``quantity`` or ``average_cost``.
    """

    # Categories
    @abstractmethod
    async def list_categories(self) -> list[Category]:
        """List categories ordered by name, with product counts."""
        pass

    @abstractmethod
    async def get_category(self, category_id: int) -> Category | None:
        pass

    @abstractmethod
    async def create_category(self, category: Category) -> Category:
        """Create a category. Raises DuplicateNameError."""
        pass

    @abstractmethod
    async def update_category(self, category: Category) -> Category:
        """Rename a category. Raises CategoryNotFoundError, DuplicateNameError."""
        pass

    @abstractmethod
    async def delete_category(self, category_id: int) -> Category:
        """Delete an unused category. Raises CategoryNotFoundError, ReferencedEntityError."""
        pass

    # Units
    @abstractmethod
    async def list_units(self) -> list[Unit]:
        pass

    @abstractmethod
    async def get_unit(self, unit_id: int) -> Unit | None:
        pass

    @abstractmethod
    async def create_unit(self, unit: Unit) -> Unit:
        pass

    @abstractmethod
    async def update_unit(self, unit: Unit) -> Unit:
        pass

    @abstractmethod
    async def delete_unit(self, unit_id: int) -> Unit:
        pass

    # Products
    @abstractmethod
    async def list_products(self) -> list[Product]:
        """List products ordered by name, with category and unit names."""
        pass

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        pass

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Insert a product with zero stock. Raises DuplicateNameError."""
        pass

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        """Update descriptive fields only. Raises ProductNotFoundError, DuplicateNameError."""
        pass

    @abstractmethod
    async def delete_product(self, product_id: int) -> Product:
        """Delete a product with no movement history."""
        pass

    @abstractmethod
    async def list_low_stock(self, threshold: int, limit: int = 20) -> list[Product]:
        """Products with quantity strictly below threshold, lowest first."""
        pass
