"""Cart application service.

The entry point for anything that drives carts (the HTTP API, scripts,
tests). Each operation takes the user's lock, processes one command
synchronously inside Protean's unit of work and reloads the cart before the
lock is released, so the returned cart is exactly what that operation left
behind.
"""

import structlog
from protean.utils.globals import current_domain

from shopping.cart.cart import ShoppingCart, ensure_orderable, is_whole_quantity
from shopping.cart.errors import CartNotFound, InvalidQuantity
from shopping.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity, fetch_product
from shopping.cart.locking import UserLocks
from shopping.cart.management import ClearCart, CreateCart
from shopping.catalogue import get_product_lookup
from shopping.catalogue.port import ProductLookupError
from shopping.config import settings

logger = structlog.get_logger(__name__)

locks = UserLocks(timeout=settings.lock_timeout_seconds)


def _process(user_id, command) -> ShoppingCart | None:
    with locks.hold(user_id):
        current_domain.process(command, asynchronous=False)
        return current_domain.repository_for(ShoppingCart).find_for_user(user_id)


def get_or_create_cart(user_id) -> ShoppingCart:
    return _process(user_id, CreateCart(user_id=user_id))


def add_item(user_id, product_id, quantity) -> ShoppingCart:
    if not is_whole_quantity(quantity):
        # Commands carry integers only. The product is still reported first.
        ensure_orderable(fetch_product(product_id), quantity)
    return _process(user_id, AddToCart(user_id=user_id, product_id=product_id, quantity=quantity))


def update_item_quantity(user_id, item_id, new_quantity) -> ShoppingCart:
    if not is_whole_quantity(new_quantity):
        cart = current_domain.repository_for(ShoppingCart).find_for_user(user_id)
        if cart is None:
            raise CartNotFound(user_id)
        cart.find_item(item_id)
        raise InvalidQuantity(new_quantity)
    return _process(user_id, UpdateCartQuantity(user_id=user_id, item_id=item_id, new_quantity=new_quantity))


def remove_item(user_id, item_id) -> ShoppingCart:
    return _process(user_id, RemoveFromCart(user_id=user_id, item_id=item_id))


def clear_cart(user_id) -> None:
    _process(user_id, ClearCart(user_id=user_id))


def get_cart(user_id) -> dict:
    """The user's cart with product display fields, created on first access."""
    return describe_cart(get_or_create_cart(user_id))


def describe_cart(cart: ShoppingCart) -> dict:
    """Plain representation of a cart, items enriched with name and image.

    Display fields are best effort: when the catalogue cannot answer they
    come back as None and the cart is still described.
    """
    lookup = get_product_lookup()
    items = []
    for item in cart.items:
        try:
            product = lookup.get_product(str(item.product_id))
        except ProductLookupError as exc:
            logger.warning(
                "Product display lookup failed",
                cart_id=str(cart.id),
                product_id=str(item.product_id),
                error=str(exc),
            )
            product = None

        items.append(
            {
                "item_id": str(item.id),
                "product_id": str(item.product_id),
                "name": product.name if product else None,
                "image_url": product.image_url if product else None,
                "quantity": item.quantity,
                "unit_price": item.price,
                "subtotal": item.subtotal,
            }
        )

    return {
        "cart_id": str(cart.id),
        "user_id": str(cart.user_id),
        "items": items,
        "item_count": cart.item_count,
        "subtotal": cart.subtotal,
        "total": cart.total,
    }
