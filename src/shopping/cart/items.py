"""Cart item management, commands and handler.

Every handler validates completely (including the catalogue lookup) before
touching the cart, so a failed command leaves nothing behind.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from shopping.cart.cart import ShoppingCart, ensure_positive_quantity
from shopping.cart.errors import CartNotFound, DependencyUnavailable, ProductNotFound
from shopping.catalogue import get_product_lookup
from shopping.catalogue.port import ProductLookupError, ProductSnapshot
from shopping.domain import shopping

logger = structlog.get_logger(__name__)


def fetch_product(product_id) -> ProductSnapshot:
    """Resolve a product against the catalogue, freshly, for validation."""
    try:
        product = get_product_lookup().get_product(str(product_id))
    except ProductLookupError as exc:
        logger.warning("Product lookup failed", product_id=str(product_id), error=str(exc))
        raise DependencyUnavailable("Product catalogue", str(exc)) from exc

    if product is None:
        raise ProductNotFound(product_id)
    return product


# Quantities are plain integers here; range checks belong to the aggregate so
# that they are reported as INVALID_QUANTITY in the documented order.
@shopping.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@shopping.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    new_quantity = Integer(required=True)


@shopping.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@shopping.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = fetch_product(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id) or ShoppingCart.create(user_id=command.user_id)
        item = cart.add_item(product, command.quantity)
        repo.add(cart)

        logger.info(
            "Item added to cart",
            user_id=str(command.user_id),
            cart_id=str(cart.id),
            product_id=str(command.product_id),
            quantity_added=command.quantity,
            quantity=item.quantity,
        )
        return str(cart.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            raise CartNotFound(command.user_id)

        item = cart.find_item(command.item_id)
        ensure_positive_quantity(command.new_quantity)
        product = fetch_product(item.product_id)

        cart.update_item_quantity(command.item_id, command.new_quantity, product)
        repo.add(cart)

        logger.info(
            "Cart item quantity updated",
            user_id=str(command.user_id),
            cart_id=str(cart.id),
            item_id=str(command.item_id),
            quantity=command.new_quantity,
        )
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            raise CartNotFound(command.user_id)

        cart.remove_item(command.item_id)
        repo.add(cart)

        logger.info(
            "Item removed from cart",
            user_id=str(command.user_id),
            cart_id=str(cart.id),
            item_id=str(command.item_id),
        )
        return str(cart.id)
