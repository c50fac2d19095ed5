"""
Adapter: Transaction ledger client.

Implements TransactionLedger port.
Records purchases and requests reversals in the transaction service over HTTP.
"""

import logging
from datetime import datetime

import httpx

from app.domain.cart.entities import PurchaseRecord
from app.domain.cart.ports import TransactionLedger

logger = logging.getLogger(__name__)


def _record_to_dict(record: PurchaseRecord) -> dict[str, object]:
    return {
        "articleId": record.article_id,
        "quantity": record.quantity,
        "email": record.owner,
        "buyDate": record.purchased_at.isoformat(),
    }


class HttpTransactionLedger(TransactionLedger):
    """Transaction service implementation of the ledger port."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def record_purchases(self, records: list[PurchaseRecord]) -> None:
        """POST every purchase record in a single request.

        Raises:
            httpx.HTTPStatusError: If the transaction service rejects the batch.
        """
        response = self._client.post(
            "/transactions/sales",
            json=[_record_to_dict(record) for record in records],
        )
        response.raise_for_status()
        logger.info("Recorded %d purchases", len(records))

    def reverse(self, owner: str, timestamp: datetime) -> None:
        """Ask the transaction service to return the records of owner at timestamp."""
        response = self._client.post(
            "/transactions/return",
            json={"email": owner, "date": timestamp.isoformat()},
        )
        response.raise_for_status()
        logger.info("Reversal requested for %s at %s", owner, timestamp.isoformat())
