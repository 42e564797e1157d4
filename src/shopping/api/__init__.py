"""Shopping domain API package."""

from shopping.api.errors import register_error_handlers
from shopping.api.middleware import domain_context_middleware
from shopping.api.routes import cart_router

__all__ = ["cart_router", "domain_context_middleware", "register_error_handlers"]
