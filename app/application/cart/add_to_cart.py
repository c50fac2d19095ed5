"""
Use case: Add an article to the caller's cart.

Input: AddToCartCommand (article_id, quantity)
Output: The persisted CartLine
Side effects: Inserts or updates one cart line.
Failure cases: ArticleNotFoundError, ItemNotAvailableError,
    CategoryLimitExceededError.
"""

import logging

from app.application.cart.clock import Clock, utc_now
from app.application.cart.dtos import AddToCartCommand
from app.domain.cart.cart_rules import (
    DEFAULT_MAX_ARTICLES_PER_CATEGORY,
    check_category_limit,
    ensure_available,
    truncate_to_seconds,
)
from app.domain.cart.entities import ArticleSnapshot, CartLine
from app.domain.cart.errors import ArticleNotFoundError
from app.domain.cart.ports import CartStore, IdentityProvider, StockCatalog

logger = logging.getLogger(__name__)


class AddToCartUseCase:
    """Orchestrates adding an article to a user's cart.

    Validates the article against the stock catalog, then either
    increments the existing line or creates a new one after the
    category-diversity check.

    The read of an existing line and the following upsert are two
    separate store calls. Concurrent adds of the same article by the
    same user rely on the store for consistency.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        cart_store: CartStore,
        stock_catalog: StockCatalog,
        max_articles_per_category: int = DEFAULT_MAX_ARTICLES_PER_CATEGORY,
        clock: Clock = utc_now,
    ) -> None:
        self._identity = identity
        self._cart_store = cart_store
        self._stock_catalog = stock_catalog
        self._max_articles_per_category = max_articles_per_category
        self._clock = clock

    def execute(self, command: AddToCartCommand) -> CartLine:
        """Run the add-to-cart use case.

        Args:
            command: Article id and quantity to add.

        Returns:
            The cart line as it was persisted.

        Raises:
            ArticleNotFoundError: If the catalog does not know the article.
            ItemNotAvailableError: If stock is below the requested quantity.
            CategoryLimitExceededError: If a new line would break the
                category-diversity rule.
        """
        owner = self._identity.current_user()
        logger.info(
            "Adding article=%d quantity=%d to cart of %s",
            command.article_id,
            command.quantity,
            owner,
        )

        article = self._get_article(command.article_id)
        ensure_available(
            article, command.quantity, self._cart_store.next_restock_date
        )

        existing = self._cart_store.find_line(owner, command.article_id)
        if existing is not None:
            existing.quantity += command.quantity
            existing.updated_at = self._clock()
            self._cart_store.upsert(existing)
            logger.info(
                "Cart line updated: article=%d quantity=%d",
                existing.article_id,
                existing.quantity,
            )
            return existing

        self._check_categories(owner, article)

        now = truncate_to_seconds(self._clock())
        line = CartLine(
            owner=owner,
            article_id=command.article_id,
            quantity=command.quantity,
            created_at=now,
            updated_at=now,
        )
        self._cart_store.upsert(line)
        logger.info("Cart line created: article=%d", line.article_id)
        return line

    def _get_article(self, article_id: int) -> ArticleSnapshot:
        article = self._stock_catalog.get_article(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    def _check_categories(self, owner: str, candidate: ArticleSnapshot) -> None:
        """Enforce the category-diversity rule over the cart plus the candidate.

        An empty cart always accepts its first article.
        """
        article_ids = list(self._cart_store.find_article_ids(owner))
        if not article_ids:
            return
        article_ids.append(candidate.id)

        snapshots = (
            candidate if article_id == candidate.id else self._get_article(article_id)
            for article_id in article_ids
        )
        check_category_limit(snapshots, self._max_articles_per_category)
