"""Cart error taxonomy.

Every failure carries a stable machine-readable ``code`` that the API layer
maps onto HTTP status codes, a human-readable ``message`` and a ``retryable``
flag. Extra ``details`` (e.g. the exceeded limit) travel with the payload.
"""

from typing import Any


class CartError(Exception):
    code = "CART_ERROR"
    retryable = False

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
            **self.details,
        }


class ProductNotFound(CartError):
    code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id} does not exist", product_id=str(product_id))


class ProductUnavailable(CartError):
    code = "PRODUCT_UNAVAILABLE"

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id} is not available for purchase", product_id=str(product_id))


class InvalidQuantity(CartError):
    code = "INVALID_QUANTITY"

    def __init__(self, quantity: Any) -> None:
        super().__init__(f"Quantity must be a positive integer, got {quantity!r}", quantity=quantity)


class MaxQuantityExceeded(CartError):
    code = "MAX_QUANTITY_EXCEEDED"

    def __init__(self, product_id: str, requested: int, limit: int) -> None:
        super().__init__(
            f"Cannot hold {requested} units of product {product_id}: the maximum order quantity is {limit}",
            product_id=str(product_id),
            requested=requested,
            limit=limit,
        )


class InsufficientStock(CartError):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Cannot hold {requested} units of product {product_id}: only {available} in stock",
            product_id=str(product_id),
            requested=requested,
            available=available,
        )


class CartNotFound(CartError):
    code = "CART_NOT_FOUND"

    def __init__(self, user_id: str) -> None:
        super().__init__(f"No cart exists for user {user_id}", user_id=str(user_id))


class CartItemNotFound(CartError):
    code = "CART_ITEM_NOT_FOUND"

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Item {item_id} not found in cart", item_id=str(item_id))


class DependencyUnavailable(CartError):
    """The product catalogue failed or timed out. Safe to retry after a backoff."""

    code = "DEPENDENCY_UNAVAILABLE"
    retryable = True

    def __init__(self, dependency: str, reason: str) -> None:
        super().__init__(f"{dependency} is unavailable: {reason}", dependency=dependency)


class CartBusy(CartError):
    """Another operation on the same cart held the lock past the timeout."""

    code = "CART_BUSY"
    retryable = True

    def __init__(self, user_id: str, timeout: float) -> None:
        super().__init__(
            f"Cart for user {user_id} is busy, gave up after {timeout}s",
            user_id=str(user_id),
        )
