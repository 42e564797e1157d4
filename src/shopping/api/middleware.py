"""Per-request setup for cart routes."""

from fastapi import Request

from shopping.domain import shopping
from shopping.utils.logging import add_context, clear_context

CART_PATH_PREFIX = "/users/"


async def domain_context_middleware(request: Request, call_next):
    """Push the Shopping domain context and bind the user to the log context."""
    path = request.url.path
    if not path.startswith(CART_PATH_PREFIX):
        # Health check, docs, etc.
        return await call_next(request)

    add_context(user_id=path.split("/")[2])
    try:
        with shopping.domain_context():
            return await call_next(request)
    finally:
        clear_context()
