"""Catalog load test scenarios.

Anonymous browsing: the full listing, a category filter, then a product
detail page. Admin seeding lives in ``admin.py``; these journeys interrupt
quietly when the catalog is still empty.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import CATEGORIES
from loadtests.helpers.state import ShopperState


class BrowseCatalogJourney(SequentialTaskSet):
    """List products -> Filter by category -> View a product."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def list_products(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.state.products = resp.json()["products"]
                if not self.state.products:
                    resp.success()
                    self.interrupt()
            else:
                resp.failure(f"List products failed: {resp.status_code}")
                self.interrupt()

    @task
    def filter_by_category(self):
        category = random.choice(CATEGORIES)
        with self.client.get(
            "/products",
            params={"category": category},
            catch_response=True,
            name="GET /products?category",
        ) as resp:
            if resp.status_code == 200:
                listed = resp.json()["products"]
                if any(p["category"] != category for p in listed):
                    resp.failure(f"Category filter leaked products outside {category}")
            else:
                resp.failure(f"Filter products failed: {resp.status_code}")

    @task
    def view_product(self):
        product = random.choice(self.state.products)
        with self.client.get(
            f"/products/{product['id']}",
            catch_response=True,
            name="GET /products/{id}",
        ) as resp:
            if resp.status_code == 200:
                resp.success()
            elif resp.status_code == 404:
                # Removed by an admin between the listing and the view
                resp.success()
            else:
                resp.failure(f"View product failed: {resp.status_code}")
        self.interrupt()


class CatalogUser(HttpUser):
    """Window shoppers who never sign in."""

    tasks = [BrowseCatalogJourney]
    wait_time = between(0.5, 2.0)
