"""
Use case: List the caller's cart with pricing.

Input: ViewCartQuery (page, size, descending, category, brand)
Output: CartDetailResult
Side effects: None.
Failure cases: InvalidPaginationError, NoDataFoundError.
"""

import logging
from typing import Optional

from app.application.cart.dtos import CartDetailLine, CartDetailResult, ViewCartQuery
from app.domain.cart.cart_rules import (
    is_available,
    quantity_for,
    total_price,
    unavailability_message,
)
from app.domain.cart.entities import ArticleSnapshot, CartLine
from app.domain.cart.errors import InvalidPaginationError, NoDataFoundError
from app.domain.cart.ports import CartStore, IdentityProvider, StockCatalog

logger = logging.getLogger(__name__)


class ViewCartUseCase:
    """Orchestrates the paginated, filtered cart listing.

    The detail lines follow the catalog page, while the total price
    is always computed over the whole cart.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        cart_store: CartStore,
        stock_catalog: StockCatalog,
    ) -> None:
        self._identity = identity
        self._cart_store = cart_store
        self._stock_catalog = stock_catalog

    def execute(self, query: ViewCartQuery) -> CartDetailResult:
        """Run the view-cart use case.

        Args:
            query: Pagination, ordering and filters for the listing.

        Returns:
            Detail lines for the requested page and the full-cart total.

        Raises:
            InvalidPaginationError: If page or size is missing or negative.
            NoDataFoundError: If the cart is empty or the catalog returns
                no article for the page.
        """
        _validate_pagination(query.page, query.size)

        owner = self._identity.current_user()
        logger.info(
            "Listing cart of %s: page=%s size=%s descending=%s",
            owner,
            query.page,
            query.size,
            query.descending,
        )

        lines = self._cart_store.find_lines(owner)
        article_ids = list(dict.fromkeys(line.article_id for line in lines))
        if not article_ids:
            raise NoDataFoundError()

        articles = self._stock_catalog.query_articles(
            page=query.page,
            size=query.size,
            descending=query.descending,
            ids=article_ids,
            category=query.category,
            brand=query.brand,
        )
        if not articles:
            raise NoDataFoundError()

        detail_lines = [self._detail_line(article, lines) for article in articles]
        prices = self._stock_catalog.get_prices(article_ids)

        return CartDetailResult(
            lines=detail_lines,
            total_price=total_price(prices, lines),
        )

    def _detail_line(
        self, article: ArticleSnapshot, lines: list[CartLine]
    ) -> CartDetailLine:
        requested = quantity_for(lines, article.id) or 0
        message = None
        if not is_available(article.available_quantity, requested):
            message = unavailability_message(self._cart_store.next_restock_date())

        return CartDetailLine(
            article_id=article.id,
            name=article.name,
            unit_price=article.unit_price,
            requested_quantity=requested,
            available_quantity=article.available_quantity,
            subtotal=article.unit_price * requested,
            message=message,
        )


def _validate_pagination(page: Optional[int], size: Optional[int]) -> None:
    if page is None or size is None or page < 0 or size < 0:
        raise InvalidPaginationError(page, size)
