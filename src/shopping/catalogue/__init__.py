"""Product lookup factory.

Provides get_product_lookup() / set_product_lookup() to swap implementations:
- InMemoryCatalogue seeded with sample products for development and testing
- HttpCatalogue when SHOPPING_CATALOGUE_URL points at a catalogue service
"""

from shopping.catalogue.fake_adapter import InMemoryCatalogue
from shopping.catalogue.http_adapter import HttpCatalogue
from shopping.catalogue.port import ProductLookup
from shopping.catalogue.samples import sample_products
from shopping.config import settings

_current_lookup: ProductLookup | None = None


def get_product_lookup() -> ProductLookup:
    """Return the current product lookup. Built from settings on first use."""
    global _current_lookup
    if _current_lookup is None:
        if settings.catalogue_url:
            _current_lookup = HttpCatalogue(
                settings.catalogue_url,
                timeout=settings.lookup_timeout_seconds,
                default_max_order_quantity=settings.default_max_order_quantity,
            )
        else:
            _current_lookup = InMemoryCatalogue(sample_products(settings.default_max_order_quantity))
    return _current_lookup


def set_product_lookup(lookup: ProductLookup) -> None:
    """Override the active product lookup (useful for tests)."""
    global _current_lookup
    _current_lookup = lookup


def reset_product_lookup() -> None:
    """Reset to default product lookup."""
    global _current_lookup
    _current_lookup = None
