"""Shopping bounded context, per-user shopping carts.

Handles the shopping cart aggregate (CQRS): adding, updating, removing and
clearing cart items while keeping item and cart totals consistent against
the product limits served by the catalogue.
"""

import structlog
from protean.domain import Domain

shopping = Domain(name="shopping")

logger = structlog.get_logger(__name__)
