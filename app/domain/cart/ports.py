"""
Port interfaces (ABCs) for the cart bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from app.domain.cart.entities import (
    ArticlePrice,
    ArticleSnapshot,
    CartLine,
    PurchaseRecord,
)


class IdentityProvider(ABC):
    """Port for resolving the identity of the current caller."""

    @abstractmethod
    def current_user(self) -> str:
        """Return the current caller's identity (email or username).

        Raises:
            IdentityUnavailableError: If no identity can be resolved.
        """
        raise NotImplementedError


class CartStore(ABC):
    """Port for persisting cart lines per user."""

    @abstractmethod
    def find_line(self, owner: str, article_id: int) -> Optional[CartLine]:
        """Return the cart line for (owner, article_id), or None."""
        raise NotImplementedError

    @abstractmethod
    def find_lines(self, owner: str) -> list[CartLine]:
        """Return every cart line belonging to owner."""
        raise NotImplementedError

    @abstractmethod
    def find_article_ids(self, owner: str) -> list[int]:
        """Return the article ids referenced by owner's cart."""
        raise NotImplementedError

    @abstractmethod
    def upsert(self, line: CartLine) -> None:
        """Insert the line, or overwrite the existing (owner, article_id) line."""
        raise NotImplementedError

    @abstractmethod
    def delete_line(self, owner: str, article_id: int) -> None:
        """Delete a single cart line."""
        raise NotImplementedError

    @abstractmethod
    def purge(self, owner: str) -> None:
        """Delete every cart line belonging to owner."""
        raise NotImplementedError

    @abstractmethod
    def touch_updated_at(self, owner: str, timestamp: datetime) -> None:
        """Set the last-modified timestamp on all of owner's remaining lines."""
        raise NotImplementedError

    @abstractmethod
    def next_restock_date(self) -> date:
        """Return the date of the next stock replenishment."""
        raise NotImplementedError


class StockCatalog(ABC):
    """Port for querying articles from the external stock service."""

    @abstractmethod
    def get_article(self, article_id: int) -> Optional[ArticleSnapshot]:
        """Return the article snapshot, or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def query_articles(
        self,
        page: int,
        size: int,
        descending: bool,
        ids: list[int],
        category: Optional[str] = None,
        brand: Optional[str] = None,
    ) -> list[ArticleSnapshot]:
        """Return one page of articles restricted to the given ids.

        Args:
            page: Zero-based page number.
            size: Page size.
            descending: Sort direction of the catalog's ordering field.
            ids: Article ids to restrict the listing to.
            category: Optional category name filter.
            brand: Optional brand name filter.

        Returns:
            The articles on the requested page.
        """
        raise NotImplementedError

    @abstractmethod
    def get_prices(self, ids: list[int]) -> list[ArticlePrice]:
        """Return the current unit price of every given article."""
        raise NotImplementedError


class TransactionLedger(ABC):
    """Port for recording purchases in the external transaction service."""

    @abstractmethod
    def record_purchases(self, records: list[PurchaseRecord]) -> None:
        """Record a batch of purchases as one submission."""
        raise NotImplementedError

    @abstractmethod
    def reverse(self, owner: str, timestamp: datetime) -> None:
        """Request reversal of the purchases recorded for owner at timestamp."""
        raise NotImplementedError
