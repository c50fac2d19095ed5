"""
FastAPI router for the cart bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas; pagination rules
are enforced by the view-cart use case.
Error mapping is handled by centralized error handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from app.application.cart.add_to_cart import AddToCartUseCase
from app.application.cart.checkout import CheckoutUseCase
from app.application.cart.dtos import (
    AddToCartCommand,
    RemoveFromCartCommand,
    ViewCartQuery,
)
from app.application.cart.remove_from_cart import RemoveFromCartUseCase
from app.application.cart.view_cart import ViewCartUseCase
from app.core.config import settings
from app.interfaces.cart.dependencies import (
    get_add_to_cart_use_case,
    get_checkout_use_case,
    get_remove_from_cart_use_case,
    get_view_cart_use_case,
)
from app.interfaces.cart.schemas import (
    AddToCartRequest,
    CartDetailItem,
    CartDetailResponse,
    CheckoutResponse,
    ErrorResponse,
    MessageResponse,
)
from app.shared.security.rate_limiting import limiter

router = APIRouter(prefix="/cart", tags=["cart"])

ADDED_MESSAGE = "Article added to the cart"
REMOVED_MESSAGE = "Article removed from the cart"
PURCHASED_MESSAGE = "Purchase completed"


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Add an article to the cart",
    description="Add units of an article, merging with an existing line.",
)
def add_to_cart(
    request: AddToCartRequest,
    use_case: AddToCartUseCase = Depends(get_add_to_cart_use_case),
) -> MessageResponse:
    """Add an article to the caller's cart."""
    use_case.execute(
        AddToCartCommand(article_id=request.article_id, quantity=request.quantity)
    )
    return MessageResponse(message=ADDED_MESSAGE)


@router.delete(
    "/{article_id}",
    response_model=MessageResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Remove an article from the cart",
)
def remove_from_cart(
    article_id: int,
    use_case: RemoveFromCartUseCase = Depends(get_remove_from_cart_use_case),
) -> MessageResponse:
    """Remove an article from the caller's cart."""
    use_case.execute(RemoveFromCartCommand(article_id=article_id))
    return MessageResponse(message=REMOVED_MESSAGE)


@router.get(
    "",
    response_model=CartDetailResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="List the cart",
    description="Paginated, filtered cart listing with the total price of the whole cart.",
)
def view_cart(
    page: Optional[int] = Query(default=None, description="Zero-based page number"),
    size: Optional[int] = Query(default=None, description="Page size"),
    descending: bool = Query(default=False, description="Sort descending"),
    category: Optional[str] = Query(default=None, description="Category name filter"),
    brand: Optional[str] = Query(default=None, description="Brand name filter"),
    use_case: ViewCartUseCase = Depends(get_view_cart_use_case),
) -> CartDetailResponse:
    """List the caller's cart."""
    result = use_case.execute(
        ViewCartQuery(
            page=page,
            size=size,
            descending=descending,
            category=category,
            brand=brand,
        )
    )
    return CartDetailResponse(
        lines=[
            CartDetailItem(
                article_id=line.article_id,
                name=line.name,
                unit_price=line.unit_price,
                requested_quantity=line.requested_quantity,
                available_quantity=line.available_quantity,
                subtotal=line.subtotal,
                message=line.message,
            )
            for line in result.lines
        ],
        total_price=result.total_price,
    )


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Check out the cart",
    description="Record one purchase per cart line and empty the cart.",
)
@limiter.limit(settings.rate_limit_checkout)
def checkout(
    request: Request,
    use_case: CheckoutUseCase = Depends(get_checkout_use_case),
) -> CheckoutResponse:
    """Check out the caller's cart."""
    result = use_case.execute()
    return CheckoutResponse(
        message=PURCHASED_MESSAGE,
        owner=result.owner,
        purchased_at=result.purchased_at,
        item_count=result.item_count,
    )
