"""Admin console load test scenarios.

Requires an existing admin account. Set ``LOADTEST_ADMIN_EMAIL`` and
``LOADTEST_ADMIN_PASSWORD``; the email must be listed in the server's
``STOREFRONT_ADMIN_EMAILS`` (or promoted with ``storefront-manage grant-admin``).
"""

import os
import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import product_data
from loadtests.helpers.state import AdminState

ADMIN_EMAIL = os.getenv("LOADTEST_ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("LOADTEST_ADMIN_PASSWORD", "admin-pass")


class CatalogSeedingJourney(SequentialTaskSet):
    """Log in -> Add two products -> List users -> Review and advance orders."""

    def on_start(self):
        self.state = AdminState()

    @task
    def login(self):
        with self.client.post(
            "/users/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
            catch_response=True,
            name="POST /users/login (admin)",
        ) as resp:
            if resp.status_code == 200 and resp.json()["user"]["role"] == "admin":
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Admin login failed: {resp.status_code}")
                self.interrupt()

    @task
    def add_product(self):
        self._add_product()

    @task
    def add_another_product(self):
        self._add_product()

    @task
    def list_users(self):
        with self.client.get(
            "/users",
            headers=self.state.headers,
            catch_response=True,
            name="GET /users",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List users failed: {resp.status_code}")

    @task
    def list_orders(self):
        with self.client.get(
            "/orders",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders",
        ) as resp:
            if resp.status_code == 200:
                self.state.order_numbers = [
                    o["order_number"] for o in resp.json()["orders"] if o["status"] == "confirmed"
                ]
            else:
                resp.failure(f"List orders failed: {resp.status_code}")

    @task
    def ship_an_order(self):
        if not self.state.order_numbers:
            self.interrupt()
        order_number = random.choice(self.state.order_numbers)
        with self.client.put(
            f"/orders/{order_number}",
            json={"status": "shipped"},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /orders/{order_number}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update order status failed: {resp.status_code}")
        self.interrupt()

    def _add_product(self):
        with self.client.post(
            "/products",
            json=product_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Add product failed: {resp.status_code}")


class AdminUser(HttpUser):
    """A handful of admins keep the catalog stocked and move orders along."""

    tasks = [CatalogSeedingJourney]
    wait_time = between(2.0, 5.0)
