"""
Domain-specific errors for the cart bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""

from datetime import date
from typing import Optional

UNNAMED_ARTICLE = "Unnamed article"


class CartDomainError(Exception):
    """Base error for all cart domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ArticleNotFoundError(CartDomainError):
    """Raised when the stock catalog has no article with the given id."""

    def __init__(self, article_id: int) -> None:
        super().__init__(f"Article not found: {article_id}")
        self.article_id = article_id


class ItemNotAvailableError(CartDomainError):
    """Raised when the requested quantity exceeds the available stock."""

    def __init__(self, article_name: Optional[str], restock_date: date) -> None:
        self.article_name = article_name or UNNAMED_ARTICLE
        self.restock_date = restock_date
        super().__init__(
            f"Article {self.article_name} is not available. "
            f"Next supply date: {restock_date.isoformat()}"
        )


class CategoryLimitExceededError(CartDomainError):
    """Raised when adding an article would exceed the per-category limit."""

    def __init__(self, category_name: str, limit: int) -> None:
        super().__init__(
            f"Cart already holds {limit} articles of category: {category_name}"
        )
        self.category_name = category_name
        self.limit = limit


class CartItemNotFoundError(CartDomainError):
    """Raised when the user's cart holds no line for the given article."""

    def __init__(self, article_id: int) -> None:
        super().__init__(f"Article {article_id} is not in the cart")
        self.article_id = article_id


class InvalidPaginationError(CartDomainError):
    """Raised when page or size is missing or negative."""

    def __init__(self, page: Optional[int], size: Optional[int]) -> None:
        super().__init__(
            f"Invalid pagination: page={page}, size={size}. "
            "Both are required and must not be negative."
        )
        self.page = page
        self.size = size


class NoDataFoundError(CartDomainError):
    """Raised when the catalog returns no articles for the user's cart."""

    def __init__(self) -> None:
        super().__init__("No articles found for the cart")


class PurchaseFailureError(CartDomainError):
    """Raised when checkout fails after the purchase flow has started."""

    def __init__(self) -> None:
        super().__init__("The purchase could not be completed")


class IdentityUnavailableError(CartDomainError):
    """Raised when the caller's identity cannot be resolved."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Identity unavailable: {reason}")
        self.reason = reason
