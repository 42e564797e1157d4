"""Shopping cart FastAPI application.

Processes cart commands synchronously via HTTP. Each request under the cart
prefix is wrapped in the Shopping domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied.
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from shopping.domain import shopping
from shopping.utils.logging import configure_logging

configure_logging(log_file_prefix="shopping")

shopping.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Shopping Cart API",
    description="Per-user shopping carts with quantity limits and consistent totals",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from shopping.api import cart_router, domain_context_middleware, register_error_handlers  # noqa: E402

app.middleware("http")(domain_context_middleware)
app.include_router(cart_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "shopping": {"name": shopping.name},
            },
        }
    )
