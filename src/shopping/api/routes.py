"""FastAPI routes for the Shopping domain, the per-user cart.

Handlers are plain functions: cart operations block on the user's lock and on
catalogue lookups, so FastAPI runs them in its worker threadpool.
"""

from fastapi import APIRouter

from shopping.api.schemas import (
    AddToCartRequest,
    CartResponse,
    ErrorResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
)
from shopping.cart import service

cart_router = APIRouter(prefix="/users/{user_id}/cart", tags=["cart"])

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Product, cart or cart item not found"},
    409: {"model": ErrorResponse, "description": "Product unavailable, insufficient stock or cart busy"},
    422: {"model": ErrorResponse, "description": "Invalid quantity or quantity limit exceeded"},
    503: {"model": ErrorResponse, "description": "Product catalogue unavailable"},
}


@cart_router.get("", response_model=CartResponse, responses=ERROR_RESPONSES)
def get_cart(user_id: str) -> CartResponse:
    return CartResponse(**service.get_cart(user_id))


@cart_router.post("/items", status_code=201, response_model=CartResponse, responses=ERROR_RESPONSES)
def add_cart_item(user_id: str, body: AddToCartRequest) -> CartResponse:
    cart = service.add_item(user_id, body.product_id, body.quantity)
    return CartResponse(**service.describe_cart(cart))


@cart_router.put("/items/{item_id}", response_model=CartResponse, responses=ERROR_RESPONSES)
def update_cart_item_quantity(user_id: str, item_id: str, body: UpdateCartQuantityRequest) -> CartResponse:
    cart = service.update_item_quantity(user_id, item_id, body.quantity)
    return CartResponse(**service.describe_cart(cart))


@cart_router.delete("/items/{item_id}", response_model=CartResponse, responses=ERROR_RESPONSES)
def remove_cart_item(user_id: str, item_id: str) -> CartResponse:
    cart = service.remove_item(user_id, item_id)
    return CartResponse(**service.describe_cart(cart))


@cart_router.delete("", response_model=StatusResponse, responses=ERROR_RESPONSES)
def clear_cart(user_id: str) -> StatusResponse:
    service.clear_cart(user_id)
    return StatusResponse()
