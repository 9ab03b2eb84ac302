"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from repairshop.application.dto.responses import ErrorResponse
from repairshop.config import get_logger
from repairshop.core.exceptions import ErrorKind, ShopError

logger = get_logger(__name__)


# Map error kinds to HTTP status codes
EXCEPTION_STATUS_MAP: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INSUFFICIENT_STOCK: status.HTTP_409_CONFLICT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.PRECONDITION_FAILED: status.HTTP_412_PRECONDITION_FAILED,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "PRODUCT_NOT_FOUND": "Check the product ID and try GET /api/products to list products.",
    "CUSTOMER_NOT_FOUND": "Check the customer ID and try GET /api/customers to list customers.",
    "CATEGORY_NOT_FOUND": "Check the category ID and try GET /api/categories.",
    "UNIT_NOT_FOUND": "Check the unit ID and try GET /api/units.",
    "SALE_NOT_FOUND": "Check the sale ID and try GET /api/sales.",
    "REPAIR_NOT_FOUND": "Check the repair ID and try GET /api/repairs.",
    "INSUFFICIENT_STOCK": "Record a purchase for the product or lower the quantity.",
    "CATEGORY_IN_USE": "Move or delete the category's products first.",
    "UNIT_IN_USE": "Move the unit's products to another unit first.",
    "PRODUCT_IN_USE": "Products with purchase, sale or repair history cannot be deleted.",
    "INVALID_ARGUMENT": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "REPORT_GENERATION_FAILED": "The PDF could not be rendered. Check server logs.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state of the resource.",
    412: "The resource is still referenced by other records.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    if error_code.startswith("DUPLICATE_"):
        return "Choose a different name."
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def shop_error_response(request: Request, exc: ShopError) -> JSONResponse:
    """Convert a domain error to the standard body, status chosen by kind."""
    status_code = EXCEPTION_STATUS_MAP.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if status_code >= 500:
        logger.error(
            "shop_error",
            path=request.url.path,
            error_code=exc.code,
            error=exc.message,
        )
        # Storage internals stay in the logs
        message = "An internal error occurred"
        detail = None
    else:
        logger.warning(
            "request_rejected",
            path=request.url.path,
            error_code=exc.code,
            kind=exc.kind.value,
        )
        message = exc.message
        detail = exc.details.get("message") if exc.kind == ErrorKind.INVALID_ARGUMENT else None

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=exc.code,
            message=message,
            hint=_get_hint(exc.code, status_code),
            detail=detail,
            path=request.url.path,
        ).model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Last line of defence: anything that escapes the exception handlers
    becomes a 500 without internals.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except ShopError as e:
            return shop_error_response(request, e)

        except Exception as e:
            return self._handle_exception(request, e)

    def _handle_exception(
        self,
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Convert an unexpected exception to a 500 response."""
        request_id = getattr(request.state, "request_id", None)

        logger.error(
            "unhandled_exception",
            request_id=request_id,
            path=request.url.path,
            error_type=exc.__class__.__name__,
            error=str(exc),
            traceback=traceback.format_exc(),
        )

        error_response = ErrorResponse(
            error_code="INTERNAL",
            message="An internal error occurred",
            hint=STATUS_HINTS[500],
            path=request.url.path,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response.model_dump(mode="json"),
        )


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""

    @app.exception_handler(ShopError)
    async def shop_exception_handler(request: Request, exc: ShopError) -> JSONResponse:
        """Handle domain errors by kind."""
        return shop_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="INVALID_ARGUMENT",
                message="Request validation failed",
                hint=HINT_MAP["INVALID_ARGUMENT"],
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail) if exc.detail else "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json"),
            headers=getattr(exc, "headers", None),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    if status_code == 404:
        return "NOT_FOUND"
    if status_code == 405:
        return "METHOD_NOT_ALLOWED"
    if status_code == 400:
        return "BAD_REQUEST"
    return "HTTP_ERROR"
