"""Translate domain failures into HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from shopping.cart.errors import CartError, InvalidQuantity

STATUS_BY_CODE = {
    "PRODUCT_NOT_FOUND": 404,
    "CART_NOT_FOUND": 404,
    "CART_ITEM_NOT_FOUND": 404,
    "INVALID_QUANTITY": 422,
    "MAX_QUANTITY_EXCEEDED": 422,
    "PRODUCT_UNAVAILABLE": 409,
    "INSUFFICIENT_STOCK": 409,
    "CART_BUSY": 409,
    "DEPENDENCY_UNAVAILABLE": 503,
}


def _error_body(code: str, message: str, errors) -> dict:
    return {"code": code, "message": message, "retryable": False, "errors": errors}


async def cart_error_handler(request: Request, exc: CartError) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(status_code=STATUS_BY_CODE.get(exc.code, 400), content=exc.to_dict())


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(status_code=422, content=_error_body("VALIDATION_ERROR", "Invalid request", exc.messages))


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: ARG001
    """Malformed request bodies. A bad ``quantity`` is reported as INVALID_QUANTITY."""
    errors = exc.errors()
    for error in errors:
        if tuple(error.get("loc", ()))[:2] == ("body", "quantity"):
            return JSONResponse(status_code=422, content=InvalidQuantity(error.get("input")).to_dict())

    return JSONResponse(
        status_code=422,
        content=_error_body("VALIDATION_ERROR", "Invalid request", jsonable_encoder(errors)),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CartError, cart_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
