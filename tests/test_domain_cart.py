"""
Tests for the cart domain layer.

Tests domain entities, error classes and cart rules in isolation.
No external dependencies or IO required.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from app.domain.cart.cart_rules import (
    check_category_limit,
    ensure_available,
    quantity_for,
    total_price,
    truncate_to_seconds,
    unavailability_message,
)
from app.domain.cart.entities import ArticlePrice, ArticleSnapshot, CartLine, Category
from app.domain.cart.errors import (
    CartDomainError,
    CategoryLimitExceededError,
    InvalidPaginationError,
    ItemNotAvailableError,
    UNNAMED_ARTICLE,
)

SHOES = Category(id=1, name="Shoes")
SPORT = Category(id=2, name="Sport")
STAMP = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _article(article_id: int, *categories: Category, quantity: int = 10) -> ArticleSnapshot:
    return ArticleSnapshot(
        id=article_id,
        name=f"Article {article_id}",
        unit_price=Decimal("10.00"),
        available_quantity=quantity,
        categories=categories,
    )


def _line(article_id: int, quantity: int) -> CartLine:
    return CartLine(
        owner="buyer@example.com",
        article_id=article_id,
        quantity=quantity,
        created_at=STAMP,
        updated_at=STAMP,
    )


class TestDomainErrors:
    """Tests for domain error classes."""

    def test_item_not_available_message(self) -> None:
        """ItemNotAvailableError names the article and the restock date."""
        error = ItemNotAvailableError("Running shoe", date(2026, 11, 18))
        assert "Running shoe" in error.message
        assert "2026-11-18" in error.message
        assert isinstance(error, CartDomainError)

    def test_item_not_available_unnamed_placeholder(self) -> None:
        """An unnamed article falls back to a placeholder."""
        error = ItemNotAvailableError(None, date(2026, 11, 18))
        assert error.article_name == UNNAMED_ARTICLE
        assert UNNAMED_ARTICLE in error.message

    def test_category_limit_message(self) -> None:
        error = CategoryLimitExceededError("Shoes", 3)
        assert "Shoes" in error.message
        assert error.category_name == "Shoes"

    def test_invalid_pagination_keeps_values(self) -> None:
        error = InvalidPaginationError(None, 5)
        assert error.page is None
        assert error.size == 5


class TestEnsureAvailable:
    """Tests for the stock availability rule."""

    def test_enough_stock_passes(self) -> None:
        ensure_available(_article(1, quantity=3), 3, lambda: date(2026, 1, 1))

    def test_short_stock_raises_with_restock_date(self) -> None:
        with pytest.raises(ItemNotAvailableError) as exc_info:
            ensure_available(_article(1, quantity=2), 3, lambda: date(2026, 1, 1))
        assert exc_info.value.restock_date == date(2026, 1, 1)

    def test_restock_date_only_read_on_failure(self) -> None:
        """The restock supplier is not consulted when stock suffices."""
        calls = []
        ensure_available(_article(1, quantity=5), 1, lambda: calls.append(1))
        assert calls == []


class TestCategoryLimit:
    """Tests for the category-diversity rule."""

    def test_three_per_category_allowed(self) -> None:
        check_category_limit([_article(i, SHOES) for i in range(1, 4)], limit=3)

    def test_fourth_article_in_category_raises(self) -> None:
        snapshots = [_article(1, SHOES), _article(2, SHOES, SPORT),
                     _article(3, SHOES), _article(4, SPORT, SHOES)]
        with pytest.raises(CategoryLimitExceededError) as exc_info:
            check_category_limit(snapshots, limit=3)
        assert exc_info.value.category_name == "Shoes"

    def test_duplicate_categories_on_one_article_count(self) -> None:
        """A single article listing one category four times trips the rule."""
        with pytest.raises(CategoryLimitExceededError):
            check_category_limit([_article(1, SHOES, SHOES, SHOES, SHOES)], limit=3)

    def test_distinct_categories_do_not_interfere(self) -> None:
        snapshots = [_article(1, SHOES), _article(2, SHOES), _article(3, SHOES),
                     _article(4, SPORT), _article(5, SPORT)]
        check_category_limit(snapshots, limit=3)

    def test_configurable_limit(self) -> None:
        with pytest.raises(CategoryLimitExceededError):
            check_category_limit([_article(1, SPORT), _article(2, SPORT)], limit=1)


class TestPricing:
    """Tests for price aggregation helpers."""

    def test_total_price_sums_price_times_quantity(self) -> None:
        prices = [ArticlePrice(id=1, price=Decimal("10")), ArticlePrice(id=2, price=Decimal("5"))]
        lines = [_line(1, 2), _line(2, 1)]
        assert total_price(prices, lines) == Decimal("25")

    def test_total_price_of_no_prices_is_zero(self) -> None:
        assert total_price(None, [_line(1, 2)]) == Decimal("0")

    def test_quantity_for_first_match(self) -> None:
        assert quantity_for([_line(1, 2), _line(2, 7)], 2) == 7
        assert quantity_for([_line(1, 2)], 9) is None

    def test_unavailability_message_has_date(self) -> None:
        assert "2026-11-18" in unavailability_message(date(2026, 11, 18))

    def test_truncate_to_seconds(self) -> None:
        moment = datetime(2026, 1, 1, 8, 0, 1, 999999)
        assert truncate_to_seconds(moment) == datetime(2026, 1, 1, 8, 0, 1)
