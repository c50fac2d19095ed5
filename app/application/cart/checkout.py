"""
Use case: Check out the caller's cart.

Input: None (the cart of the current caller)
Output: CheckoutResult
Side effects: Records one purchase per cart line in the transaction
    ledger, then empties the cart.
Failure cases: NoDataFoundError, ItemNotAvailableError,
    PurchaseFailureError (after a compensating reversal request).
"""

import logging
from datetime import datetime

from app.application.cart.clock import Clock, utc_now
from app.application.cart.dtos import CheckoutResult
from app.domain.cart.cart_rules import ensure_available, quantity_for
from app.domain.cart.entities import ArticleSnapshot, CartLine, PurchaseRecord
from app.domain.cart.errors import (
    ItemNotAvailableError,
    NoDataFoundError,
    PurchaseFailureError,
)
from app.domain.cart.ports import (
    CartStore,
    IdentityProvider,
    StockCatalog,
    TransactionLedger,
)

logger = logging.getLogger(__name__)

FIRST_PAGE = 0


class CheckoutUseCase:
    """Orchestrates converting a cart into purchase records.

    Stock is re-validated for every line before anything is written.
    Once the purchase flow has started, any unexpected failure asks the
    ledger to reverse what was recorded for (owner, timestamp) and is
    surfaced as PurchaseFailureError chained to the root cause.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        cart_store: CartStore,
        stock_catalog: StockCatalog,
        ledger: TransactionLedger,
        clock: Clock = utc_now,
    ) -> None:
        self._identity = identity
        self._cart_store = cart_store
        self._stock_catalog = stock_catalog
        self._ledger = ledger
        self._clock = clock

    def execute(self) -> CheckoutResult:
        """Run the checkout use case.

        Returns:
            The owner, the shared purchase timestamp and the record count.

        Raises:
            NoDataFoundError: If the catalog knows none of the cart articles.
            ItemNotAvailableError: If any line exceeds the available stock.
            PurchaseFailureError: If the purchase could not be completed.
        """
        purchased_at = self._clock()
        owner = self._identity.current_user()
        logger.info("Checking out cart of %s", owner)

        try:
            lines = self._cart_store.find_lines(owner)
            articles = self._load_articles(lines)
            self._validate_stock(lines, articles)

            records = _purchase_records(lines, owner, purchased_at)
            self._ledger.record_purchases(records)
            self._cart_store.purge(owner)
        except (ItemNotAvailableError, NoDataFoundError):
            raise
        except Exception as exc:
            logger.exception("Checkout failed for %s, requesting reversal", owner)
            self._compensate(owner, purchased_at)
            raise PurchaseFailureError() from exc

        logger.info("Checkout completed for %s: %d records", owner, len(records))
        return CheckoutResult(
            owner=owner,
            purchased_at=purchased_at,
            item_count=len(records),
        )

    def _load_articles(self, lines: list[CartLine]) -> list[ArticleSnapshot]:
        article_ids = [line.article_id for line in lines]
        if not article_ids:
            raise NoDataFoundError()

        articles = self._stock_catalog.query_articles(
            page=FIRST_PAGE,
            size=len(article_ids),
            descending=False,
            ids=article_ids,
            category=None,
            brand=None,
        )
        if not articles:
            raise NoDataFoundError()
        return articles

    def _validate_stock(
        self, lines: list[CartLine], articles: list[ArticleSnapshot]
    ) -> None:
        for article in articles:
            requested = quantity_for(lines, article.id) or 0
            ensure_available(article, requested, self._cart_store.next_restock_date)

    def _compensate(self, owner: str, purchased_at: datetime) -> None:
        """Ask the ledger to reverse the purchases recorded at purchased_at."""
        logger.warning(
            "Reversing purchases of %s at %s", owner, purchased_at.isoformat()
        )
        try:
            self._ledger.reverse(owner, purchased_at)
        except Exception:
            logger.exception("Reversal request failed for %s", owner)


def _purchase_records(
    lines: list[CartLine], owner: str, purchased_at: datetime
) -> list[PurchaseRecord]:
    return [
        PurchaseRecord(
            article_id=line.article_id,
            quantity=line.quantity,
            owner=owner,
            purchased_at=purchased_at,
        )
        for line in lines
    ]
