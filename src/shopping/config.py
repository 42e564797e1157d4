"""Runtime settings for the Shopping domain.

Infrastructure (databases, brokers, event store) lives in ``domain.toml``;
these are the cart's own knobs, read from the environment.
"""

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


@dataclass(frozen=True)
class CartSettings:
    default_max_order_quantity: int = 10
    catalogue_url: str | None = None
    lookup_timeout_seconds: float = 2.0
    lock_timeout_seconds: float = 5.0

    @classmethod
    def from_env(cls) -> "CartSettings":
        return cls(
            default_max_order_quantity=_env_int("SHOPPING_DEFAULT_MAX_ORDER_QUANTITY", 10),
            catalogue_url=os.getenv("SHOPPING_CATALOGUE_URL") or None,
            lookup_timeout_seconds=_env_float("SHOPPING_LOOKUP_TIMEOUT_SECONDS", 2.0),
            lock_timeout_seconds=_env_float("SHOPPING_LOCK_TIMEOUT_SECONDS", 5.0),
        )


settings = CartSettings.from_env()
