"""
Centralized error handlers for FastAPI.

Maps cart domain errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.cart.errors import (
    ArticleNotFoundError,
    CartDomainError,
    CartItemNotFoundError,
    CategoryLimitExceededError,
    IdentityUnavailableError,
    InvalidPaginationError,
    ItemNotAvailableError,
    NoDataFoundError,
    PurchaseFailureError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_401 = 401
HTTP_404 = 404
HTTP_409 = 409
HTTP_500 = 500


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all cart error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(ArticleNotFoundError)
    async def handle_article_not_found(
        _request: Request, exc: ArticleNotFoundError
    ) -> JSONResponse:
        """Handle unknown catalog articles."""
        logger.warning("Article not found: %d", exc.article_id)
        return _error_response(HTTP_404, "Article not found", exc.message)

    @app.exception_handler(ItemNotAvailableError)
    async def handle_item_not_available(
        _request: Request, exc: ItemNotAvailableError
    ) -> JSONResponse:
        """Handle insufficient stock. The detail carries the restock date."""
        logger.warning("Item not available: %s", exc.article_name)
        return _error_response(HTTP_409, "Item not available", exc.message)

    @app.exception_handler(CategoryLimitExceededError)
    async def handle_category_limit(
        _request: Request, exc: CategoryLimitExceededError
    ) -> JSONResponse:
        """Handle category-diversity violations."""
        logger.warning("Category limit exceeded: %s", exc.category_name)
        return _error_response(HTTP_409, "Category limit exceeded", exc.message)

    @app.exception_handler(CartItemNotFoundError)
    async def handle_cart_item_not_found(
        _request: Request, exc: CartItemNotFoundError
    ) -> JSONResponse:
        """Handle removal of an article that is not in the cart."""
        logger.warning("Cart item not found: %d", exc.article_id)
        return _error_response(HTTP_404, "Cart item not found", exc.message)

    @app.exception_handler(InvalidPaginationError)
    async def handle_invalid_pagination(
        _request: Request, exc: InvalidPaginationError
    ) -> JSONResponse:
        """Handle missing or negative page/size values."""
        logger.warning("Invalid pagination: page=%s size=%s", exc.page, exc.size)
        return _error_response(HTTP_400, "Invalid pagination", exc.message)

    @app.exception_handler(NoDataFoundError)
    async def handle_no_data_found(
        _request: Request, exc: NoDataFoundError
    ) -> JSONResponse:
        """Handle an empty catalog answer for the cart."""
        logger.warning("No data found for cart")
        return _error_response(HTTP_404, "No data found", exc.message)

    @app.exception_handler(IdentityUnavailableError)
    async def handle_identity_unavailable(
        _request: Request, exc: IdentityUnavailableError
    ) -> JSONResponse:
        """Handle missing or invalid credentials."""
        logger.warning("Identity unavailable: %s", exc.reason)
        return _error_response(HTTP_401, "Authentication required")

    @app.exception_handler(PurchaseFailureError)
    async def handle_purchase_failure(
        _request: Request, exc: PurchaseFailureError
    ) -> JSONResponse:
        """Handle a checkout that failed after the purchase flow started."""
        logger.error("Purchase failure: %s", exc.message)
        return _error_response(HTTP_500, "Purchase failed", exc.message)

    @app.exception_handler(CartDomainError)
    async def handle_cart_domain(
        _request: Request, exc: CartDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled cart domain errors."""
        logger.error("Unhandled cart domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
