"""Cart load test scenarios.

ShopperUser walks one private cart through its lifecycle. ContendedCartUser
points many simulated users at a handful of shared carts so that concurrent
mutations of the same cart are exercised; limit refusals are expected there
and are not counted as failures.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, quantity_update_data, shopper_id
from loadtests.helpers.response import extract_error_detail, is_expected_rejection
from loadtests.helpers.state import CartState

SHARED_CART_USERS = [f"shared-shopper-{n}" for n in range(5)]


class CartLifecycleJourney(SequentialTaskSet):
    """View Cart -> Add Items -> Update Quantity -> Remove Item -> Clear.

    Models a browsing shopper who adds items, changes their mind, and
    finally empties the cart.
    """

    def on_start(self):
        self.state = CartState(user_id=shopper_id())

    def _record_items(self, resp):
        self.state.item_ids = [item["item_id"] for item in resp.json()["items"]]

    @task
    def view_cart(self):
        with self.client.get(
            f"/users/{self.state.user_id}/cart",
            catch_response=True,
            name="GET /users/{id}/cart",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get cart failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_item_1(self):
        self._add_item()

    @task
    def add_item_2(self):
        self._add_item()

    @task
    def add_item_3(self):
        self._add_item()

    def _add_item(self):
        with self.client.post(
            f"/users/{self.state.user_id}/cart/items",
            json=cart_item_data(),
            catch_response=True,
            name="POST /users/{id}/cart/items",
        ) as resp:
            if resp.status_code == 201:
                self._record_items(resp)
            elif is_expected_rejection(resp):
                self.state.rejections += 1
                resp.success()
            else:
                resp.failure(f"Add cart item failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def update_quantity(self):
        if not self.state.item_ids:
            return
        item_id = random.choice(self.state.item_ids)
        with self.client.put(
            f"/users/{self.state.user_id}/cart/items/{item_id}",
            json=quantity_update_data(),
            catch_response=True,
            name="PUT /users/{id}/cart/items/{item_id}",
        ) as resp:
            if resp.status_code == 200:
                self._record_items(resp)
            elif is_expected_rejection(resp):
                self.state.rejections += 1
                resp.success()
            else:
                resp.failure(f"Update quantity failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def remove_item(self):
        if not self.state.item_ids:
            return
        item_id = self.state.item_ids[0]
        with self.client.delete(
            f"/users/{self.state.user_id}/cart/items/{item_id}",
            catch_response=True,
            name="DELETE /users/{id}/cart/items/{item_id}",
        ) as resp:
            if resp.status_code == 200:
                self._record_items(resp)
            else:
                resp.failure(f"Remove item failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def clear_cart(self):
        with self.client.delete(
            f"/users/{self.state.user_id}/cart",
            catch_response=True,
            name="DELETE /users/{id}/cart",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Clear cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """One shopper per simulated user, each with a private cart."""

    wait_time = between(1, 3)
    tasks = [CartLifecycleJourney]


class ContendedCartUser(HttpUser):
    """Many simulated users mutating a few shared carts at once."""

    wait_time = between(0.1, 0.5)

    @task(5)
    def add_to_shared_cart(self):
        user_id = random.choice(SHARED_CART_USERS)
        with self.client.post(
            f"/users/{user_id}/cart/items",
            json=cart_item_data(),
            catch_response=True,
            name="POST /users/{id}/cart/items [shared]",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                if body["subtotal"] != body["total"]:
                    resp.failure("Cart total drifted from subtotal")
            elif is_expected_rejection(resp):
                resp.success()
            else:
                resp.failure(f"Shared add failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task(1)
    def clear_shared_cart(self):
        user_id = random.choice(SHARED_CART_USERS)
        with self.client.delete(
            f"/users/{user_id}/cart",
            catch_response=True,
            name="DELETE /users/{id}/cart [shared]",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Shared clear failed: {resp.status_code} - {extract_error_detail(resp)}")
