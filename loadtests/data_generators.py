"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the cart API's Pydantic request schemas.
Product ids come from the sample catalogue the server seeds by default.
"""

import random
import uuid

from faker import Faker

fake = Faker()

SAMPLE_PRODUCT_IDS = [
    "prod-laptop",
    "prod-smartphone",
    "prod-headphones",
    "prod-coffee-maker",
    "prod-backpack",
    "prod-running-shoes",
    "prod-desk-lamp",
    "prod-water-bottle",
]


def shopper_id() -> str:
    """Generate unique shopper ids like 'jdoe-a1b2c3d4'."""
    return f"{fake.user_name()[:20]}-{uuid.uuid4().hex[:8]}"


def cart_item_data() -> dict:
    """Generate AddToCartRequest payload."""
    return {
        "product_id": random.choice(SAMPLE_PRODUCT_IDS),
        "quantity": random.randint(1, 3),
    }


def quantity_update_data() -> dict:
    """Generate UpdateCartQuantityRequest payload."""
    return {"quantity": random.randint(1, 5)}
