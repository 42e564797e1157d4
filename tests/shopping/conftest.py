import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain
from shopping.catalogue import reset_product_lookup, set_product_lookup
from shopping.catalogue.fake_adapter import InMemoryCatalogue
from shopping.catalogue.port import ProductSnapshot


@pytest.fixture(scope="session")
def shopping_bed():
    from shopping.domain import shopping

    bed = DomainFixture(shopping)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(shopping_bed):
    with shopping_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def catalogue():
    """A fresh in-memory catalogue for every test."""
    fake = InMemoryCatalogue(
        [
            ProductSnapshot(product_id="prod-p", name="Widget", price=29.99, stock=100, max_order_quantity=10),
            ProductSnapshot(
                product_id="prod-q",
                name="Gadget",
                price=5.50,
                stock=3,
                max_order_quantity=10,
                image_url="https://img.example/gadget.png",
            ),
            ProductSnapshot(product_id="prod-retired", name="Retired", price=9.99, stock=50, active=False),
        ]
    )
    set_product_lookup(fake)
    yield fake
    reset_product_lookup()
