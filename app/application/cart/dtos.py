"""
Data Transfer Objects for the cart application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class AddToCartCommand:
    """Input DTO for adding an article to the caller's cart.

    Attributes:
        article_id: Catalog id of the article.
        quantity: Number of units to add (>= 1).
    """

    article_id: int
    quantity: int


@dataclass(frozen=True)
class RemoveFromCartCommand:
    """Input DTO for removing an article from the caller's cart.

    Attributes:
        article_id: Catalog id of the article to remove.
    """

    article_id: int


@dataclass(frozen=True)
class ViewCartQuery:
    """Input DTO for listing the caller's cart.

    Attributes:
        page: Zero-based page number. Required.
        size: Page size. Required.
        descending: Sort direction of the catalog ordering.
        category: Optional category name filter.
        brand: Optional brand name filter.
    """

    page: Optional[int]
    size: Optional[int]
    descending: bool = False
    category: Optional[str] = None
    brand: Optional[str] = None


@dataclass(frozen=True)
class CartDetailLine:
    """Output DTO for one article in the cart listing.

    Attributes:
        article_id: Catalog id of the article.
        name: Article name.
        unit_price: Current unit price.
        requested_quantity: Quantity held in the cart.
        available_quantity: Quantity in stock.
        subtotal: unit_price x requested_quantity.
        message: Unavailability notice when stock is short, else None.
    """

    article_id: int
    name: Optional[str]
    unit_price: Decimal
    requested_quantity: int
    available_quantity: int
    subtotal: Decimal
    message: Optional[str] = None


@dataclass(frozen=True)
class CartDetailResult:
    """Output DTO for the cart listing.

    Attributes:
        lines: Detail lines for the requested page.
        total_price: Price of the whole cart, regardless of page or filters.
    """

    lines: list[CartDetailLine] = field(default_factory=list)
    total_price: Decimal = Decimal("0")


@dataclass(frozen=True)
class CheckoutResult:
    """Output DTO for a completed checkout.

    Attributes:
        owner: Identity the purchase was recorded for.
        purchased_at: Timestamp shared by every purchase record.
        item_count: Number of purchase records submitted.
    """

    owner: str
    purchased_at: datetime
    item_count: int
