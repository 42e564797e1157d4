"""Shopping Cart aggregate (CQRS), one active cart per user.

The cart owns its items. Each item keeps the price the product had when it
was first added; quantities are checked against the product's current
``max_order_quantity`` and stock every time they change. Item and cart
totals are recomputed from scratch by a single routine after every mutation.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer

from shopping.cart.errors import (
    CartItemNotFound,
    InsufficientStock,
    InvalidQuantity,
    MaxQuantityExceeded,
    ProductUnavailable,
)
from shopping.cart.events import (
    CartCleared,
    CartCreated,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from shopping.cart.pricing import line_subtotal, sum_amounts, unit_price
from shopping.catalogue.port import ProductSnapshot
from shopping.domain import shopping


def is_whole_quantity(quantity) -> bool:
    """True for real integers only; bools, floats and numeric strings are not quantities."""
    return isinstance(quantity, int) and not isinstance(quantity, bool)


def ensure_positive_quantity(quantity) -> int:
    """Reject anything that is not an integer of at least 1."""
    if not is_whole_quantity(quantity) or quantity < 1:
        raise InvalidQuantity(quantity)
    return quantity


def ensure_orderable(product: ProductSnapshot, quantity) -> int:
    """The product must be on sale, then the quantity must be a positive integer."""
    if not product.active:
        raise ProductUnavailable(product.product_id)
    return ensure_positive_quantity(quantity)


def ensure_within_limits(product: ProductSnapshot, quantity: int) -> None:
    if quantity > product.max_order_quantity:
        raise MaxQuantityExceeded(product.product_id, quantity, product.max_order_quantity)
    if quantity > product.stock:
        raise InsufficientStock(product.product_id, quantity, product.stock)


@shopping.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)  # Snapshot taken when first added
    subtotal = Float(default=0.0)
    added_at = DateTime()


@shopping.aggregate
class ShoppingCart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    subtotal = Float(default=0.0)
    total = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_equal_subtotal(self):
        if self.total != self.subtotal:
            raise ValidationError({"total": ["Cart total must equal its subtotal"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        cart = cls(
            user_id=user_id,
            subtotal=0.0,
            total=0.0,
            created_at=now,
            updated_at=now,
        )
        cart.raise_(CartCreated(cart_id=str(cart.id), user_id=str(user_id)))
        return cart

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    def find_item(self, item_id) -> CartItem:
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise CartItemNotFound(item_id)
        return item

    def item_for_product(self, product_id) -> CartItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product: ProductSnapshot, quantity):
        """Add a product to the cart, merging into its line if already present.

        A merged line keeps its original price snapshot; only new lines take
        the product's current price.
        """
        ensure_orderable(product, quantity)

        existing = self.item_for_product(product.product_id)
        candidate = existing.quantity + quantity if existing else quantity
        ensure_within_limits(product, candidate)

        now = datetime.now(UTC)
        with atomic_change(self):
            if existing:
                existing.quantity = candidate
                item = existing
            else:
                item = CartItem(
                    product_id=product.product_id,
                    quantity=quantity,
                    price=unit_price(product.price),
                    added_at=now,
                )
                self.add_items(item)
            self.recalculate_totals()
            self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product.product_id),
                quantity_added=quantity,
                quantity=item.quantity,
                unit_price=item.price,
            )
        )
        return item

    def update_item_quantity(self, item_id, new_quantity, product: ProductSnapshot):
        """Set an item's quantity, re-checked against the product's current limits."""
        item = self.find_item(item_id)
        ensure_positive_quantity(new_quantity)
        ensure_within_limits(product, new_quantity)

        previous_quantity = item.quantity
        now = datetime.now(UTC)
        with atomic_change(self):
            item.quantity = new_quantity
            self.recalculate_totals()
            self.updated_at = now

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return item

    def remove_item(self, item_id):
        item = self.find_item(item_id)
        product_id = str(item.product_id)

        now = datetime.now(UTC)
        with atomic_change(self):
            self.remove_items(item)
            self.recalculate_totals()
            self.updated_at = now

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
                product_id=product_id,
            )
        )

    def clear(self):
        """Empty the cart. Clearing an empty cart changes nothing."""
        items = list(self.items)
        if not items:
            return

        now = datetime.now(UTC)
        with atomic_change(self):
            for item in items:
                self.remove_items(item)
            self.recalculate_totals()
            self.updated_at = now

        self.raise_(CartCleared(cart_id=str(self.id), items_removed=len(items)))

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    def recalculate_totals(self):
        """Recompute every item subtotal, then the cart subtotal and total."""
        for item in self.items:
            item.subtotal = line_subtotal(item.price, item.quantity)
        self.subtotal = sum_amounts(item.subtotal for item in self.items)
        self.total = self.subtotal
