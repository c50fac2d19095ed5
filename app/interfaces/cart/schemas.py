"""
Pydantic schemas for cart API request/response validation.

These schemas enforce input validation and define the API contract.
All fields use strict typing with constraints.
No business logic belongs here.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    """Request schema for adding an article to the cart.

    Attributes:
        article_id: Catalog id of the article (>= 1).
        quantity: Number of units to add (>= 1).
    """

    article_id: int = Field(..., ge=1, description="Catalog article id")
    quantity: int = Field(..., ge=1, description="Units to add to the cart")


class MessageResponse(BaseModel):
    """Response schema for mutations that return only a confirmation."""

    message: str


class CartDetailItem(BaseModel):
    """A single article line in the cart listing."""

    article_id: int
    name: str | None = None
    unit_price: Decimal
    requested_quantity: int
    available_quantity: int
    subtotal: Decimal
    message: str | None = None


class CartDetailResponse(BaseModel):
    """Response schema for the cart listing.

    `total_price` covers the whole cart, not only the returned page.
    """

    lines: list[CartDetailItem]
    total_price: Decimal


class CheckoutResponse(BaseModel):
    """Response schema for a completed checkout."""

    message: str
    owner: str
    purchased_at: datetime
    item_count: int


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: str | None = None
