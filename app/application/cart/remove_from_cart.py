"""
Use case: Remove an article from the caller's cart.

Input: RemoveFromCartCommand (article_id)
Output: None
Side effects: Deletes one cart line and refreshes the cart's
    last-modified timestamp.
Failure cases: CartItemNotFoundError.
"""

import logging

from app.application.cart.clock import Clock, utc_now
from app.application.cart.dtos import RemoveFromCartCommand
from app.domain.cart.cart_rules import truncate_to_seconds
from app.domain.cart.errors import CartItemNotFoundError
from app.domain.cart.ports import CartStore, IdentityProvider

logger = logging.getLogger(__name__)


class RemoveFromCartUseCase:
    """Orchestrates removing a single line from a user's cart."""

    def __init__(
        self,
        identity: IdentityProvider,
        cart_store: CartStore,
        clock: Clock = utc_now,
    ) -> None:
        self._identity = identity
        self._cart_store = cart_store
        self._clock = clock

    def execute(self, command: RemoveFromCartCommand) -> None:
        """Run the remove-from-cart use case.

        Raises:
            CartItemNotFoundError: If the cart holds no line for the article.
        """
        owner = self._identity.current_user()
        logger.info("Removing article=%d from cart of %s", command.article_id, owner)

        if self._cart_store.find_line(owner, command.article_id) is None:
            raise CartItemNotFoundError(command.article_id)

        self._cart_store.delete_line(owner, command.article_id)
        self._cart_store.touch_updated_at(owner, truncate_to_seconds(self._clock()))
