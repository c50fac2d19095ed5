"""
Shared fixtures for the cart test suite.

Provides in-memory doubles of the four cart ports. They keep call
logs so tests can assert which mutations did (or did not) happen.
"""

from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Optional

import pytest

from app.domain.cart.entities import (
    ArticlePrice,
    ArticleSnapshot,
    CartLine,
    PurchaseRecord,
)
from app.domain.cart.ports import (
    CartStore,
    IdentityProvider,
    StockCatalog,
    TransactionLedger,
)

OWNER = "buyer@example.com"
RESTOCK_DATE = date(2026, 11, 18)
FIXED_NOW = datetime(2026, 10, 19, 14, 30, 15, 987654, tzinfo=timezone.utc)


class InMemoryIdentityProvider(IdentityProvider):
    """Always resolves to the same caller."""

    def __init__(self, owner: str = OWNER) -> None:
        self.owner = owner
        self.calls = 0

    def current_user(self) -> str:
        self.calls += 1
        return self.owner


class InMemoryCartStore(CartStore):
    """Dict-backed cart store keyed by (owner, article_id)."""

    def __init__(self, restock_date: date = RESTOCK_DATE) -> None:
        self.lines: dict[tuple[str, int], CartLine] = {}
        self.upserts: list[CartLine] = []
        self.deleted: list[tuple[str, int]] = []
        self.purged: list[str] = []
        self.touched: list[tuple[str, datetime]] = []
        self.restock_date = restock_date

    def add(self, line: CartLine) -> None:
        """Seed a line without recording an upsert."""
        self.lines[(line.owner, line.article_id)] = replace(line)

    def find_line(self, owner: str, article_id: int) -> Optional[CartLine]:
        line = self.lines.get((owner, article_id))
        return replace(line) if line is not None else None

    def find_lines(self, owner: str) -> list[CartLine]:
        return [replace(line) for (o, _), line in self.lines.items() if o == owner]

    def find_article_ids(self, owner: str) -> list[int]:
        return [article_id for (o, article_id) in self.lines if o == owner]

    def upsert(self, line: CartLine) -> None:
        self.upserts.append(replace(line))
        self.lines[(line.owner, line.article_id)] = replace(line)

    def delete_line(self, owner: str, article_id: int) -> None:
        self.deleted.append((owner, article_id))
        self.lines.pop((owner, article_id), None)

    def purge(self, owner: str) -> None:
        self.purged.append(owner)
        for key in [key for key in self.lines if key[0] == owner]:
            del self.lines[key]

    def touch_updated_at(self, owner: str, timestamp: datetime) -> None:
        self.touched.append((owner, timestamp))
        for key, line in self.lines.items():
            if key[0] == owner:
                line.updated_at = timestamp

    def next_restock_date(self) -> date:
        return self.restock_date


class InMemoryStockCatalog(StockCatalog):
    """Catalog over a fixed set of articles, paginated by ascending id."""

    def __init__(self, articles: Optional[list[ArticleSnapshot]] = None) -> None:
        self.articles: dict[int, ArticleSnapshot] = {}
        self.get_article_calls: list[int] = []
        self.query_calls: list[dict] = []
        self.price_calls: list[list[int]] = []
        for article in articles or []:
            self.put(article)

    def put(self, article: ArticleSnapshot) -> None:
        self.articles[article.id] = article

    def get_article(self, article_id: int) -> Optional[ArticleSnapshot]:
        self.get_article_calls.append(article_id)
        return self.articles.get(article_id)

    def query_articles(
        self,
        page: int,
        size: int,
        descending: bool,
        ids: list[int],
        category: Optional[str] = None,
        brand: Optional[str] = None,
    ) -> list[ArticleSnapshot]:
        self.query_calls.append(
            {
                "page": page,
                "size": size,
                "descending": descending,
                "ids": list(ids),
                "category": category,
                "brand": brand,
            }
        )
        matches = [self.articles[i] for i in ids if i in self.articles]
        if category:
            matches = [
                a for a in matches if any(c.name == category for c in a.categories)
            ]
        if brand:
            matches = [a for a in matches if a.brand == brand]
        matches.sort(key=lambda a: a.id, reverse=descending)
        start = page * size
        return matches[start:start + size]

    def get_prices(self, ids: list[int]) -> list[ArticlePrice]:
        self.price_calls.append(list(ids))
        return [
            ArticlePrice(id=i, price=self.articles[i].unit_price)
            for i in ids
            if i in self.articles
        ]


class InMemoryTransactionLedger(TransactionLedger):
    """Ledger that keeps submitted batches and reversal requests."""

    def __init__(self) -> None:
        self.batches: list[list[PurchaseRecord]] = []
        self.reversals: list[tuple[str, datetime]] = []
        self.fail_on_record: Optional[Exception] = None

    def record_purchases(self, records: list[PurchaseRecord]) -> None:
        self.batches.append(list(records))
        if self.fail_on_record is not None:
            raise self.fail_on_record

    def reverse(self, owner: str, timestamp: datetime) -> None:
        self.reversals.append((owner, timestamp))


@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider()


@pytest.fixture
def cart_store() -> InMemoryCartStore:
    return InMemoryCartStore()


@pytest.fixture
def stock_catalog() -> InMemoryStockCatalog:
    return InMemoryStockCatalog()


@pytest.fixture
def ledger() -> InMemoryTransactionLedger:
    return InMemoryTransactionLedger()


@pytest.fixture
def clock():
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW
