"""Cart management, commands and handler.

Handles lazy cart creation (one cart per user) and clearing.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from shopping.cart.cart import ShoppingCart
from shopping.domain import shopping

logger = structlog.get_logger(__name__)


@shopping.command(part_of="ShoppingCart")
class CreateCart:
    """Get the user's cart, creating an empty one on first access."""

    user_id = Identifier(required=True)


@shopping.command(part_of="ShoppingCart")
class ClearCart:
    """Remove every item from the user's cart. A missing cart is not an error."""

    user_id = Identifier(required=True)


@shopping.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart, created = current_domain.repository_for(ShoppingCart).get_or_create_for_user(command.user_id)
        if created:
            logger.info("Cart created", user_id=str(command.user_id), cart_id=str(cart.id))
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            return None

        removed = len(cart.items)
        cart.clear()
        repo.add(cart)

        logger.info("Cart cleared", user_id=str(command.user_id), cart_id=str(cart.id), items_removed=removed)
        return str(cart.id)
