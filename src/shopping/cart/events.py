"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Float, Identifier, Integer

from shopping.domain import shopping


@shopping.event(part_of="ShoppingCart")
class CartCreated:
    """A shopper's cart was created on first access."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)


@shopping.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart, or merged into an existing line."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    quantity = Integer(required=True)
    unit_price = Float(required=True)


@shopping.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart item was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@shopping.event(part_of="ShoppingCart")
class CartItemRemoved:
    """An item was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shopping.event(part_of="ShoppingCart")
class CartCleared:
    """All items were removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    items_removed = Integer(required=True)
