"""Cart store, keyed by user, at most one cart each."""

from shopping.cart.cart import ShoppingCart
from shopping.domain import shopping


@shopping.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    """Repository for the ShoppingCart aggregate.

    The base repository provides ``add`` (save/replace) and ``get`` by cart
    id; carts are addressed by user everywhere else.
    """

    def find_for_user(self, user_id) -> ShoppingCart | None:
        """Return the user's cart, or None when they have never had one."""
        results = self._dao.query.filter(user_id=str(user_id)).all()
        return results.items[0] if results.items else None

    def get_or_create_for_user(self, user_id) -> tuple[ShoppingCart, bool]:
        """Return the user's cart, creating and saving an empty one if needed.

        The boolean is True when the cart was just created.
        """
        cart = self.find_for_user(user_id)
        if cart is not None:
            return cart, False

        cart = ShoppingCart.create(user_id=user_id)
        self.add(cart)
        return cart, True
