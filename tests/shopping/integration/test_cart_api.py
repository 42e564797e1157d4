"""Integration tests for Cart API endpoints via TestClient."""

import threading

import pytest
import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from shopping.api import cart_router, domain_context_middleware, register_error_handlers
from shopping.cart.cart import ShoppingCart
from shopping.catalogue import set_product_lookup
from shopping.catalogue.fake_adapter import InMemoryCatalogue
from shopping.catalogue.port import ProductSnapshot


@pytest.fixture()
def app():
    app = FastAPI()
    app.middleware("http")(domain_context_middleware)
    app.include_router(cart_router)
    register_error_handlers(app)

    @app.get("/users/{user_id}/log-context")
    def log_context(user_id: str):  # noqa: ARG001
        return structlog.contextvars.get_contextvars()

    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


def _add_item(client, user_id="user-api-001", product_id="prod-p", quantity=1):
    """Helper: POST /users/{user_id}/cart/items."""
    return client.post(
        f"/users/{user_id}/cart/items",
        json={"product_id": product_id, "quantity": quantity},
    )


class TestGetCartEndpoint:
    def test_get_creates_empty_cart(self, client):
        response = client.get("/users/user-api-001/cart")
        assert response.status_code == 200

        body = response.json()
        assert body["user_id"] == "user-api-001"
        assert body["items"] == []
        assert body["subtotal"] == 0.0
        assert body["total"] == 0.0

        cart = current_domain.repository_for(ShoppingCart).find_for_user("user-api-001")
        assert str(cart.id) == body["cart_id"]


class TestCartItemEndpoints:
    def test_add_item(self, client):
        response = _add_item(client, quantity=3)
        assert response.status_code == 201

        body = response.json()
        assert len(body["items"]) == 1
        item = body["items"][0]
        assert item["product_id"] == "prod-p"
        assert item["name"] == "Widget"
        assert item["quantity"] == 3
        assert item["unit_price"] == 29.99
        assert item["subtotal"] == 89.97
        assert body["subtotal"] == 89.97
        assert body["total"] == 89.97
        assert body["item_count"] == 3

    def test_update_item_quantity(self, client):
        item_id = _add_item(client, quantity=1).json()["items"][0]["item_id"]

        response = client.put(f"/users/user-api-001/cart/items/{item_id}", json={"quantity": 10})
        assert response.status_code == 200
        assert response.json()["subtotal"] == 299.90

    def test_remove_item(self, client):
        item_id = _add_item(client, quantity=1).json()["items"][0]["item_id"]

        response = client.delete(f"/users/user-api-001/cart/items/{item_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["items"] == []
        assert body["total"] == 0.0

    def test_clear_cart(self, client):
        _add_item(client, product_id="prod-p")
        _add_item(client, product_id="prod-q")

        response = client.delete("/users/user-api-001/cart")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

        assert client.get("/users/user-api-001/cart").json()["items"] == []

    def test_clear_cart_without_cart(self, client):
        assert client.delete("/users/user-api-new/cart").status_code == 200
        assert client.delete("/users/user-api-new/cart").status_code == 200


class TestErrorResponses:
    def test_max_quantity_exceeded(self, client):
        _add_item(client, quantity=8)
        response = _add_item(client, quantity=5)

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "MAX_QUANTITY_EXCEEDED"
        assert body["limit"] == 10
        assert "10" in body["message"]
        assert body["retryable"] is False

    def test_insufficient_stock(self, client):
        response = _add_item(client, product_id="prod-q", quantity=4)
        assert response.status_code == 409
        assert response.json()["code"] == "INSUFFICIENT_STOCK"

    def test_product_not_found(self, client):
        response = _add_item(client, product_id="prod-missing")
        assert response.status_code == 404
        assert response.json()["code"] == "PRODUCT_NOT_FOUND"

    def test_product_unavailable(self, client):
        response = _add_item(client, product_id="prod-retired")
        assert response.status_code == 409
        assert response.json()["code"] == "PRODUCT_UNAVAILABLE"

    def test_invalid_quantity(self, client):
        response = _add_item(client, quantity=0)
        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_QUANTITY"

    def test_cart_item_not_found(self, client):
        _add_item(client)
        response = client.put("/users/user-api-001/cart/items/item-404", json={"quantity": 2})
        assert response.status_code == 404
        assert response.json()["code"] == "CART_ITEM_NOT_FOUND"

    def test_cart_not_found(self, client):
        response = client.delete("/users/user-api-404/cart/items/item-404")
        assert response.status_code == 404
        assert response.json()["code"] == "CART_NOT_FOUND"

    def test_dependency_unavailable(self, client, catalogue):
        catalogue.configure(should_fail=True)
        response = _add_item(client)
        assert response.status_code == 503
        body = response.json()
        assert body["code"] == "DEPENDENCY_UNAVAILABLE"
        assert body["retryable"] is True


class TestMalformedBodies:
    @pytest.mark.parametrize("quantity", [2.5, "3", True])
    def test_add_with_non_integer_quantity(self, client, quantity):
        response = _add_item(client, quantity=quantity)
        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "INVALID_QUANTITY"
        assert body["quantity"] == quantity
        assert body["retryable"] is False

    def test_update_with_non_integer_quantity(self, client):
        item_id = _add_item(client).json()["items"][0]["item_id"]

        response = client.put(f"/users/user-api-001/cart/items/{item_id}", json={"quantity": 2.5})
        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_QUANTITY"
        assert client.get("/users/user-api-001/cart").json()["items"][0]["quantity"] == 1

    def test_missing_product_id(self, client):
        response = client.post("/users/user-api-001/cart/items", json={"quantity": 1})
        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"][0]["loc"] == ["body", "product_id"]


class TestErrorSchema:
    def test_error_statuses_document_the_error_body(self, client):
        schema = client.get("/openapi.json").json()
        responses = schema["paths"]["/users/{user_id}/cart/items"]["post"]["responses"]

        for status in ("404", "409", "503"):
            ref = responses[status]["content"]["application/json"]["schema"]["$ref"]
            assert ref.endswith("/ErrorResponse")
        assert {"code", "message", "retryable"} <= set(schema["components"]["schemas"]["ErrorResponse"]["properties"])


class TestRequestContext:
    def test_user_is_bound_to_the_log_context(self, client):
        response = client.get("/users/user-ctx/log-context")
        assert response.status_code == 200
        assert response.json()["user_id"] == "user-ctx"


class GatedCatalogue(InMemoryCatalogue):
    """Holds lookups of one product until released."""

    def __init__(self, products, gated_product_id):
        super().__init__(products)
        self.gated_product_id = gated_product_id
        self.entered = threading.Event()
        self.release = threading.Event()

    def get_product(self, product_id):
        if product_id == self.gated_product_id and not self.release.is_set():
            self.entered.set()
            self.release.wait(timeout=5)
        return super().get_product(product_id)


class TestConcurrentRequests:
    def test_slow_lookup_does_not_hold_up_other_users(self, app, catalogue):
        slow_product = ProductSnapshot(product_id="prod-slow", name="Slow", price=1.0, stock=10)
        gated = GatedCatalogue([*catalogue.products.values(), slow_product], "prod-slow")
        set_product_lookup(gated)
        responses = {}

        with TestClient(app) as client:

            def add_slow():
                responses["slow"] = _add_item(client, user_id="slow-shopper", product_id="prod-slow")

            slow = threading.Thread(target=add_slow)
            slow.start()
            assert gated.entered.wait(timeout=5)

            responses["quick"] = _add_item(client, user_id="quick-shopper", product_id="prod-p")
            slow_still_waiting = slow.is_alive()

            gated.release.set()
            slow.join(timeout=10)

        assert responses["quick"].status_code == 201
        assert slow_still_waiting
        assert responses["slow"].status_code == 201
