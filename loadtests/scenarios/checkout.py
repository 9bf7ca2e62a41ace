"""Checkout load test scenarios.

Each journey registers a shopper, fills a cart from the live catalog and
checks out through ``POST /checkout``. The gateway journey opens a gateway
order and signs the payment with ``LOADTEST_GATEWAY_SECRET``, which must
match the server's ``RAZORPAY_KEY_SECRET`` (the fake gateway's default is
used when neither is set).
"""

import os
import uuid

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    address_data,
    cart_lines,
    lines_total,
    offline_method,
    registration_data,
    upi_handle,
)
from loadtests.helpers.state import ShopperState
from storefront.config import DEFAULT_GATEWAY_SECRET
from storefront.gateway.signature import compute_signature

GATEWAY_SECRET = os.getenv("LOADTEST_GATEWAY_SECRET", DEFAULT_GATEWAY_SECRET)


class _CheckoutJourney(SequentialTaskSet):
    """Shared steps: register, then fill a cart from the catalog."""

    def on_start(self):
        self.state = ShopperState()
        self.address = None

    @task
    def register(self):
        payload = registration_data()
        with self.client.post(
            "/users/register",
            json=payload,
            catch_response=True,
            name="POST /users/register",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.token = body["token"]
                self.state.user_id = body["user"]["id"]
                self.state.email = payload["email"]
                self.address = address_data(email=payload["email"])
            else:
                resp.failure(f"Register failed: {resp.status_code}")
                self.interrupt()

    @task
    def fill_cart(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code}")
                self.interrupt()
            products = resp.json()["products"]
            if not products:
                resp.success()
                self.interrupt()
            self.state.products = products
            self.state.cart = cart_lines(products)

    def _checkout(self, payload: dict, name: str):
        with self.client.post(
            "/checkout",
            json=payload,
            headers=self.state.headers,
            catch_response=True,
            name=name,
        ) as resp:
            if resp.status_code == 201:
                self.state.order_number = resp.json()["order_number"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code}")
                self.interrupt()

    def _check_order_history(self):
        with self.client.get(
            f"/orders/{self.state.user_id}",
            catch_response=True,
            name="GET /orders/{user_id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order history failed: {resp.status_code}")
            elif self.state.order_number not in {o["order_number"] for o in resp.json()["orders"]}:
                resp.failure(f"Order {self.state.order_number} missing from history")
        self.interrupt()


class OfflineCheckoutJourney(_CheckoutJourney):
    """Register -> Fill cart -> Checkout with COD or bank transfer -> Order history."""

    @task
    def checkout(self):
        self._checkout(
            {
                "address": self.address,
                "payment_method": offline_method(),
                "products": self.state.cart,
                "total_amount": lines_total(self.state.cart),
            },
            name="POST /checkout (offline)",
        )

    @task
    def order_history(self):
        self._check_order_history()


class GatewayCheckoutJourney(_CheckoutJourney):
    """Register -> Fill cart -> Open gateway order -> Checkout with signed proof -> Order history."""

    @task
    def open_gateway_order(self):
        with self.client.post(
            "/payments/create-order",
            json={
                "amount": lines_total(self.state.cart),
                "receipt": f"rcpt_{uuid.uuid4().hex[:12]}",
                "payment_method": "upi",
                "email": self.state.email,
                "phone": self.address["phone"],
            },
            headers=self.state.headers,
            catch_response=True,
            name="POST /payments/create-order",
        ) as resp:
            if resp.status_code == 201:
                self.state.gateway_order_id = resp.json()["order"]["id"]
            else:
                resp.failure(f"Create gateway order failed: {resp.status_code}")
                self.interrupt()

    @task
    def checkout(self):
        gateway_payment_id = f"pay_{uuid.uuid4().hex[:14]}"
        self._checkout(
            {
                "address": self.address,
                "payment_method": "upi",
                "upi_id": upi_handle(),
                "products": self.state.cart,
                "total_amount": lines_total(self.state.cart),
                "transaction_id": gateway_payment_id,
                "gateway": {
                    "gateway_order_id": self.state.gateway_order_id,
                    "gateway_payment_id": gateway_payment_id,
                    "signature": compute_signature(GATEWAY_SECRET, self.state.gateway_order_id, gateway_payment_id),
                },
            },
            name="POST /checkout (gateway)",
        )

    @task
    def order_history(self):
        self._check_order_history()


class TamperedSignatureJourney(_CheckoutJourney):
    """A forged gateway signature must be rejected without creating an order."""

    @task
    def checkout_with_forged_signature(self):
        with self.client.post(
            "/checkout",
            json={
                "address": self.address,
                "payment_method": "upi",
                "products": self.state.cart,
                "gateway": {
                    "gateway_order_id": f"order_{uuid.uuid4().hex[:14]}",
                    "gateway_payment_id": f"pay_{uuid.uuid4().hex[:14]}",
                    "signature": "0" * 64,
                },
            },
            headers=self.state.headers,
            catch_response=True,
            name="POST /checkout (forged)",
        ) as resp:
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Expected 400 for a forged signature, got {resp.status_code}")
        self.interrupt()


class CheckoutUser(HttpUser):
    tasks = {OfflineCheckoutJourney: 3, GatewayCheckoutJourney: 3, TamperedSignatureJourney: 1}
    wait_time = between(1.0, 3.0)
