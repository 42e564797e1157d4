"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, no cross-user sharing.
State tracks item ids returned by the cart endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class CartState:
    """Tracks state for a shopping cart lifecycle."""

    user_id: str | None = None
    item_ids: list[str] = field(default_factory=list)
    rejections: int = 0
