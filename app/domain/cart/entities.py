"""
Domain entities for the cart bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class CartLine:
    """One (owner, article) quantity record in a user's cart.

    A user's cart holds at most one line per article. The line is
    created on the first add, updated on later adds of the same
    article, and deleted individually or on checkout.
    """

    owner: str
    article_id: int
    quantity: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Category:
    """A catalog category an article belongs to."""

    id: int
    name: str


@dataclass(frozen=True)
class ArticleSnapshot:
    """Read-only view of an article as reported by the stock catalog."""

    id: int
    name: Optional[str]
    unit_price: Decimal
    available_quantity: int
    categories: tuple[Category, ...] = field(default_factory=tuple)
    brand: Optional[str] = None


@dataclass(frozen=True)
class ArticlePrice:
    """Current unit price of a single article."""

    id: int
    price: Decimal


@dataclass(frozen=True)
class PurchaseRecord:
    """A completed purchase of one cart line, sent to the transaction ledger."""

    article_id: int
    quantity: int
    owner: str
    purchased_at: datetime
