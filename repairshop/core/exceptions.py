"""
Domain exceptions for the repair shop backend.

Every exception carries an ``ErrorKind`` so callers (the HTTP layer, tests,
scripts) can branch on the category of failure instead of on class names or
message text. Business-rule violations are raised before any write, so a
raised ``ShopError`` always means nothing was committed.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Category of a domain failure."""

    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    INSUFFICIENT_STOCK = "insufficient_stock"
    CONFLICT = "conflict"
    PRECONDITION_FAILED = "precondition_failed"
    INTERNAL = "internal"


class ShopError(Exception):
    """Base exception for all repair shop errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


# Not found
class NotFoundError(ShopError):
    """A referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id: int, code: str | None = None):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code=code or f"{entity.upper()}_NOT_FOUND",
            details={f"{entity.lower()}_id": entity_id},
        )
        self.entity_id = entity_id


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: int):
        super().__init__("Product", product_id)


class CustomerNotFoundError(NotFoundError):
    def __init__(self, customer_id: int):
        super().__init__("Customer", customer_id)


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: int):
        super().__init__("Category", category_id)


class UnitNotFoundError(NotFoundError):
    def __init__(self, unit_id: int):
        super().__init__("Unit", unit_id)


class SaleNotFoundError(NotFoundError):
    def __init__(self, sale_id: int):
        super().__init__("Sale", sale_id)


class RepairNotFoundError(NotFoundError):
    def __init__(self, repair_id: int):
        super().__init__("Repair", repair_id)


# Invalid input
class InvalidArgumentError(ShopError):
    """Malformed input: non-positive quantity, negative cost, empty line list."""

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Invalid value for '{field}': {message}",
            code="INVALID_ARGUMENT",
            details={
                "field": field,
                "message": message,
                "value": None if value is None else str(value)[:100],
            },
        )


# Stock
class InsufficientStockError(ShopError):
    """Requested quantity exceeds what is on hand."""

    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(
        self,
        product_id: int,
        available: int,
        requested: int,
        product_name: str | None = None,
    ):
        label = product_name or f"product {product_id}"
        super().__init__(
            f"Insufficient stock for {label}. "
            f"Available: {available}, Requested: {requested}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "product_name": product_name,
                "available": available,
                "requested": requested,
            },
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested


# Catalog integrity
class DuplicateNameError(ShopError):
    """Unique name already taken (category, unit, product)."""

    kind = ErrorKind.CONFLICT

    def __init__(self, entity: str, name: str):
        super().__init__(
            f"A {entity.lower()} with this name already exists",
            code=f"DUPLICATE_{entity.upper()}",
            details={"entity": entity.lower(), "name": name},
        )


class ReferencedEntityError(ShopError):
    """Deletion blocked because dependent records exist."""

    kind = ErrorKind.PRECONDITION_FAILED

    def __init__(self, entity: str, entity_id: int, dependents: int, dependent_label: str):
        super().__init__(
            f"Cannot delete {entity.lower()}. "
            f"It has {dependents} associated {dependent_label}(s).",
            code=f"{entity.upper()}_IN_USE",
            details={
                f"{entity.lower()}_id": entity_id,
                "dependents": dependents,
            },
        )


# Storage
class StorageError(ShopError):
    """Base exception for storage operations."""

    kind = ErrorKind.INTERNAL


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ReportGenerationError(ShopError):
    """A PDF report could not be rendered."""

    def __init__(self, report: str, reason: str):
        super().__init__(
            f"Failed to generate {report} report: {reason}",
            code="REPORT_GENERATION_FAILED",
            details={"report": report, "reason": reason},
        )
