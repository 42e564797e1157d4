"""Pydantic request/response schemas for the Shopping API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from pydantic import BaseModel, StrictInt


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
# Quantities must be JSON integers but are not range-checked here: the domain
# reports bad quantities with its own INVALID_QUANTITY error code.
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: StrictInt = 1

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-laptop",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: StrictInt


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartItemResponse(BaseModel):
    item_id: str
    product_id: str
    name: str | None = None
    image_url: str | None = None
    quantity: int
    unit_price: float
    subtotal: float


class CartResponse(BaseModel):
    cart_id: str
    user_id: str
    items: list[CartItemResponse]
    item_count: int
    subtotal: float
    total: float


class StatusResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    """Body of every failed cart request; error-specific details ride along as extra keys."""

    code: str
    message: str
    retryable: bool = False

    model_config = {"extra": "allow"}
