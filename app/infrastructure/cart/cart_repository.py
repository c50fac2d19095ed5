"""
Adapter: Cart line repository.

Implements CartStore port.
Persists cart lines in the cart_items table through SQLAlchemy Core.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Engine

from app.domain.cart.entities import CartLine
from app.domain.cart.ports import CartStore

logger = logging.getLogger(__name__)

metadata = MetaData()

cart_items = Table(
    "cart_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, index=True),
    Column("article_id", Integer, nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("email", "article_id", name="uq_cart_items_email_article"),
)


def create_tables(engine: Engine) -> None:
    """Create the cart tables if they do not exist."""
    metadata.create_all(engine)


def _to_line(row) -> CartLine:
    return CartLine(
        owner=row.email,
        article_id=row.article_id,
        quantity=row.quantity,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlCartStore(CartStore):
    """Relational implementation of the cart store.

    Implements the CartStore port defined in the domain layer.
    The (email, article_id) unique constraint backs the one-line-per-article
    invariant.
    """

    def __init__(
        self,
        engine: Engine,
        restock_interval_days: int = 30,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._engine = engine
        self._restock_interval = timedelta(days=restock_interval_days)
        self._today = today

    def find_line(self, owner: str, article_id: int) -> Optional[CartLine]:
        """Return the cart line for (owner, article_id), or None."""
        query = select(cart_items).where(
            cart_items.c.email == owner,
            cart_items.c.article_id == article_id,
        )
        with self._engine.connect() as conn:
            row = conn.execute(query).first()
        return _to_line(row) if row is not None else None

    def find_lines(self, owner: str) -> list[CartLine]:
        """Return every cart line of owner, oldest first."""
        query = (
            select(cart_items)
            .where(cart_items.c.email == owner)
            .order_by(cart_items.c.id)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [_to_line(row) for row in rows]

    def find_article_ids(self, owner: str) -> list[int]:
        """Return the article ids in owner's cart."""
        query = (
            select(cart_items.c.article_id)
            .where(cart_items.c.email == owner)
            .order_by(cart_items.c.id)
        )
        with self._engine.connect() as conn:
            return list(conn.execute(query).scalars())

    def upsert(self, line: CartLine) -> None:
        """Update the (owner, article_id) line, inserting it when absent.

        Both statements run in one transaction. The read that decided
        the new quantity happened earlier, outside this transaction.
        """
        with self._engine.begin() as conn:
            result = conn.execute(
                update(cart_items)
                .where(
                    cart_items.c.email == line.owner,
                    cart_items.c.article_id == line.article_id,
                )
                .values(quantity=line.quantity, updated_at=line.updated_at)
            )
            if result.rowcount == 0:
                conn.execute(
                    insert(cart_items).values(
                        email=line.owner,
                        article_id=line.article_id,
                        quantity=line.quantity,
                        created_at=line.created_at,
                        updated_at=line.updated_at,
                    )
                )
        logger.debug(
            "Saved cart line owner=%s article=%d quantity=%d",
            line.owner,
            line.article_id,
            line.quantity,
        )

    def delete_line(self, owner: str, article_id: int) -> None:
        """Delete a single cart line."""
        with self._engine.begin() as conn:
            conn.execute(
                delete(cart_items).where(
                    cart_items.c.email == owner,
                    cart_items.c.article_id == article_id,
                )
            )

    def purge(self, owner: str) -> None:
        """Delete every cart line of owner."""
        with self._engine.begin() as conn:
            result = conn.execute(delete(cart_items).where(cart_items.c.email == owner))
        logger.debug("Purged %d cart lines for %s", result.rowcount, owner)

    def touch_updated_at(self, owner: str, timestamp: datetime) -> None:
        """Set updated_at on all of owner's remaining lines."""
        with self._engine.begin() as conn:
            conn.execute(
                update(cart_items)
                .where(cart_items.c.email == owner)
                .values(updated_at=timestamp)
            )

    def next_restock_date(self) -> date:
        """Return today plus the configured replenishment interval."""
        return self._today() + self._restock_interval
