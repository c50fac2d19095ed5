"""
Domain service: Cart business rules.

Pure business logic shared by the cart use cases.
No framework imports. No IO. No side effects.

Rules:
    - Stock availability (requested quantity vs. available quantity)
    - Category diversity (at most N cart articles per category)
    - Price aggregation over cart lines
"""

from collections import Counter
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional

from app.domain.cart.entities import ArticlePrice, ArticleSnapshot, CartLine
from app.domain.cart.errors import CategoryLimitExceededError, ItemNotAvailableError

DEFAULT_MAX_ARTICLES_PER_CATEGORY = 3
ITEM_NOT_AVAILABLE_MESSAGE = "The article is not available. Next supply date: {date}"


def is_available(available_quantity: int, requested_quantity: int) -> bool:
    """Return True if the stock covers the requested quantity."""
    return available_quantity >= requested_quantity


def ensure_available(
    snapshot: ArticleSnapshot,
    requested_quantity: int,
    restock_date: Callable[[], date],
) -> None:
    """Raise ItemNotAvailableError if the article cannot cover the request.

    The restock date is only looked up when the check fails.

    Args:
        snapshot: Article as reported by the stock catalog.
        requested_quantity: Quantity the user wants.
        restock_date: Supplier of the next replenishment date.

    Raises:
        ItemNotAvailableError: If available stock is below the request.
    """
    if not is_available(snapshot.available_quantity, requested_quantity):
        raise ItemNotAvailableError(snapshot.name, restock_date())


def unavailability_message(restock_date: date) -> str:
    """Build the notice attached to a cart detail line that is short on stock."""
    return ITEM_NOT_AVAILABLE_MESSAGE.format(date=restock_date.isoformat())


def check_category_limit(
    snapshots: Iterable[ArticleSnapshot],
    limit: int = DEFAULT_MAX_ARTICLES_PER_CATEGORY,
) -> None:
    """Tally category occurrences across articles and enforce the limit.

    Every category entry of every article counts once, so duplicate
    categories on a single article are counted too.

    Raises:
        CategoryLimitExceededError: The first time a category tally
            goes over the limit.
    """
    tally: Counter[int] = Counter()
    for snapshot in snapshots:
        for category in snapshot.categories:
            tally[category.id] += 1
            if tally[category.id] > limit:
                raise CategoryLimitExceededError(category.name, limit)


def quantity_for(lines: list[CartLine], article_id: int) -> Optional[int]:
    """Return the quantity of the first line matching article_id, or None."""
    return next(
        (line.quantity for line in lines if line.article_id == article_id),
        None,
    )


def total_price(prices: Optional[list[ArticlePrice]], lines: list[CartLine]) -> Decimal:
    """Sum price x quantity over every priced article found in the cart."""
    total = Decimal("0")
    for article in prices or []:
        quantity = quantity_for(lines, article.id)
        if quantity is None:
            continue
        total += article.price * quantity
    return total


def truncate_to_seconds(moment: datetime) -> datetime:
    """Drop sub-second precision from a timestamp."""
    return moment.replace(microsecond=0)
