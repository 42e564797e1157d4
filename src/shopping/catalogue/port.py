"""Product lookup port (abstract interface).

The cart treats products as read-only reference data owned by the catalogue.
Adapters answer "what does product X cost, how many are left, how many may a
shopper hold, is it on sale" and nothing else.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductSnapshot:
    """Point-in-time view of a catalogue product."""

    product_id: str
    name: str
    price: float
    stock: int
    max_order_quantity: int = 10
    active: bool = True
    image_url: str | None = None
    description: str | None = None
    category: str | None = None


class ProductLookupError(Exception):
    """The catalogue could not be reached or answered with an error."""


class ProductLookup(ABC):
    """Abstract product lookup interface."""

    @abstractmethod
    def get_product(self, product_id: str) -> ProductSnapshot | None:
        """Return the product, or None when the catalogue does not know it.

        Raises ProductLookupError on transport failures and timeouts.
        """
        ...
