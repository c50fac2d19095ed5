"""
Adapter: Stock catalog client.

Implements StockCatalog port.
Queries article details and prices from the stock service over HTTP.
"""

import logging
from decimal import Decimal
from typing import Any, Optional

import httpx

from app.domain.cart.entities import ArticlePrice, ArticleSnapshot, Category
from app.domain.cart.ports import StockCatalog

logger = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404


def _join_ids(ids: list[int]) -> str:
    return ",".join(str(article_id) for article_id in ids)


def _to_snapshot(payload: dict[str, Any]) -> ArticleSnapshot:
    """Map a stock-service article document to an ArticleSnapshot."""
    brand = payload.get("brand")
    if isinstance(brand, dict):
        brand = brand.get("name")
    return ArticleSnapshot(
        id=int(payload["id"]),
        name=payload.get("name"),
        unit_price=Decimal(str(payload.get("price", 0))),
        available_quantity=int(payload.get("quantity", 0)),
        categories=tuple(
            Category(id=int(category["id"]), name=category.get("name", ""))
            for category in payload.get("categories") or []
        ),
        brand=brand,
    )


class HttpStockCatalog(StockCatalog):
    """Stock service implementation of the catalog port.

    The injected httpx client carries the base URL, timeout and any
    forwarded authorization header.
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def get_article(self, article_id: int) -> Optional[ArticleSnapshot]:
        """Return the article, or None when the stock service answers 404."""
        response = self._client.get(f"/articles/{article_id}")
        if response.status_code == HTTP_NOT_FOUND:
            logger.info("Article %d not found in stock service", article_id)
            return None
        response.raise_for_status()
        return _to_snapshot(response.json())

    def query_articles(
        self,
        page: int,
        size: int,
        descending: bool,
        ids: list[int],
        category: Optional[str] = None,
        brand: Optional[str] = None,
    ) -> list[ArticleSnapshot]:
        """Return one page of the given articles, filtered and sorted remotely.

        Accepts both a bare JSON list and a page object with a `content` list.
        """
        params: dict[str, Any] = {
            "page": page,
            "size": size,
            "descending": str(descending).lower(),
            "ids": _join_ids(ids),
        }
        if category:
            params["categoryName"] = category
        if brand:
            params["brandName"] = brand

        response = self._client.get("/articles/cart", params=params)
        response.raise_for_status()
        payload = response.json()
        if isinstance(payload, dict):
            payload = payload.get("content") or []
        return [_to_snapshot(item) for item in payload]

    def get_prices(self, ids: list[int]) -> list[ArticlePrice]:
        """Return the current unit prices of the given articles."""
        response = self._client.get("/articles/prices", params={"ids": _join_ids(ids)})
        response.raise_for_status()
        return [
            ArticlePrice(id=int(item["id"]), price=Decimal(str(item["price"])))
            for item in response.json()
        ]
