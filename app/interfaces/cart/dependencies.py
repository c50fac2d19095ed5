"""
Dependency injection for the cart bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the cart context.
"""

from functools import lru_cache
from typing import Iterator, Optional

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from app.application.cart.add_to_cart import AddToCartUseCase
from app.application.cart.checkout import CheckoutUseCase
from app.application.cart.remove_from_cart import RemoveFromCartUseCase
from app.application.cart.view_cart import ViewCartUseCase
from app.core.config import settings
from app.domain.cart.ports import (
    CartStore,
    IdentityProvider,
    StockCatalog,
    TransactionLedger,
)
from app.infrastructure.cart.cart_repository import SqlCartStore
from app.infrastructure.cart.identity_provider import JwtIdentityProvider
from app.infrastructure.cart.stock_catalog_client import HttpStockCatalog
from app.infrastructure.cart.transaction_ledger_client import HttpTransactionLedger

# auto_error=False: a missing header reaches the identity provider,
# which reports it as IdentityUnavailableError (401).
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_db_engine() -> Engine:
    """Build the SQLAlchemy engine once per process from application settings."""
    return create_engine(settings.get_database_url(), pool_pre_ping=True)


def _bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials is not None else None


def _service_client(base_url: str, token: Optional[str]) -> httpx.Client:
    """Build an HTTP client that forwards the caller's bearer token."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.Client(
        base_url=base_url,
        timeout=settings.http_timeout_seconds,
        headers=headers,
    )


def get_identity_provider(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> IdentityProvider:
    """Build the identity provider for the current request's bearer token."""
    return JwtIdentityProvider(
        token=_bearer_token(credentials),
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        identity_claim=settings.jwt_identity_claim,
    )


def get_cart_store() -> CartStore:
    """Build the cart store on the shared engine."""
    return SqlCartStore(
        engine=get_db_engine(),
        restock_interval_days=settings.restock_interval_days,
    )


def get_stock_catalog(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Iterator[StockCatalog]:
    """Yield a stock catalog client, closed after the request."""
    with _service_client(settings.stock_service_url, _bearer_token(credentials)) as client:
        yield HttpStockCatalog(client)


def get_transaction_ledger(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Iterator[TransactionLedger]:
    """Yield a transaction ledger client, closed after the request."""
    with _service_client(
        settings.transaction_service_url, _bearer_token(credentials)
    ) as client:
        yield HttpTransactionLedger(client)


def get_add_to_cart_use_case(
    identity: IdentityProvider = Depends(get_identity_provider),
    cart_store: CartStore = Depends(get_cart_store),
    stock_catalog: StockCatalog = Depends(get_stock_catalog),
) -> AddToCartUseCase:
    """Build AddToCartUseCase with its infrastructure dependencies."""
    return AddToCartUseCase(
        identity=identity,
        cart_store=cart_store,
        stock_catalog=stock_catalog,
        max_articles_per_category=settings.max_articles_per_category,
    )


def get_remove_from_cart_use_case(
    identity: IdentityProvider = Depends(get_identity_provider),
    cart_store: CartStore = Depends(get_cart_store),
) -> RemoveFromCartUseCase:
    """Build RemoveFromCartUseCase with its infrastructure dependencies."""
    return RemoveFromCartUseCase(identity=identity, cart_store=cart_store)


def get_view_cart_use_case(
    identity: IdentityProvider = Depends(get_identity_provider),
    cart_store: CartStore = Depends(get_cart_store),
    stock_catalog: StockCatalog = Depends(get_stock_catalog),
) -> ViewCartUseCase:
    """Build ViewCartUseCase with its infrastructure dependencies."""
    return ViewCartUseCase(
        identity=identity,
        cart_store=cart_store,
        stock_catalog=stock_catalog,
    )


def get_checkout_use_case(
    identity: IdentityProvider = Depends(get_identity_provider),
    cart_store: CartStore = Depends(get_cart_store),
    stock_catalog: StockCatalog = Depends(get_stock_catalog),
    ledger: TransactionLedger = Depends(get_transaction_ledger),
) -> CheckoutUseCase:
    """Build CheckoutUseCase with its infrastructure dependencies."""
    return CheckoutUseCase(
        identity=identity,
        cart_store=cart_store,
        stock_catalog=stock_catalog,
        ledger=ledger,
    )
