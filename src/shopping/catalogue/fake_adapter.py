"""Configurable in-memory catalogue for development and testing.

Holds products in a dict keyed by id. It can be told to fail, which makes
dependency-outage paths testable, and it records every lookup.
"""

from dataclasses import replace

from shopping.catalogue.port import ProductLookup, ProductLookupError, ProductSnapshot


class InMemoryCatalogue(ProductLookup):
    """Configurable fake product catalogue."""

    def __init__(self, products: list[ProductSnapshot] | None = None) -> None:
        self.products: dict[str, ProductSnapshot] = {}
        self.should_fail: bool = False
        self.failure_reason: str = "Catalogue timed out"
        self.calls: list[str] = []
        for product in products or []:
            self.add(product)

    def configure(self, should_fail: bool, failure_reason: str = "Catalogue timed out") -> None:
        """Configure lookup behavior at runtime."""
        self.should_fail = should_fail
        self.failure_reason = failure_reason

    def add(self, product: ProductSnapshot) -> ProductSnapshot:
        self.products[str(product.product_id)] = product
        return product

    def update(self, product_id: str, **changes) -> ProductSnapshot:
        """Change price, stock, limits or status of an existing product."""
        product = replace(self.products[str(product_id)], **changes)
        self.products[str(product_id)] = product
        return product

    def remove(self, product_id: str) -> None:
        self.products.pop(str(product_id), None)

    def get_product(self, product_id: str) -> ProductSnapshot | None:
        self.calls.append(str(product_id))
        if self.should_fail:
            raise ProductLookupError(self.failure_reason)
        return self.products.get(str(product_id))
