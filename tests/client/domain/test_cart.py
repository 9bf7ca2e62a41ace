"""Tests for the client cart and its storage mirror."""

import json

import pytest

from storefront.client.cart import Cart
from storefront.client.storage import CART_KEY, LocalStorage

KURTA = {"id": "p-kurta", "name": "Block Print Kurta", "price": 500.0, "image": "kurta.jpg"}
TEA = {"id": "p-tea", "name": "Rose Tea", "price": 300.0}


@pytest.fixture()
def cart():
    return Cart()


class TestCart:
    def test_new_cart_is_empty(self, cart):
        assert cart.is_empty
        assert cart.total == 0
        assert cart.item_count == 0

    def test_adding_twice_increments(self, cart):
        cart.add(KURTA)
        cart.add(KURTA)
        assert len(cart) == 1
        assert cart.lines()[0]["quantity"] == 2

    def test_total(self, cart):
        cart.add(KURTA)
        cart.add(KURTA)
        cart.add(TEA)
        assert cart.total == 1300.0
        assert cart.item_count == 3

    def test_remove(self, cart):
        cart.add(KURTA)
        cart.remove("p-kurta")
        assert "p-kurta" not in cart

    def test_set_quantity(self, cart):
        cart.add(TEA)
        cart.set_quantity("p-tea", 4)
        assert cart.total == 1200.0

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_set_quantity_to_zero_removes(self, cart, quantity):
        cart.add(TEA)
        cart.set_quantity("p-tea", quantity)
        assert cart.is_empty

    def test_set_quantity_of_missing_product_is_ignored(self, cart):
        cart.set_quantity("p-none", 3)
        assert cart.is_empty

    def test_clear(self, cart):
        cart.add(KURTA)
        cart.clear()
        assert cart.is_empty

    def test_lines_snapshot(self, cart):
        cart.add(KURTA)
        assert cart.lines() == [
            {"product_id": "p-kurta", "name": "Block Print Kurta", "price": 500.0, "quantity": 1, "image": "kurta.jpg"}
        ]


class TestCartMirror:
    def test_cart_survives_a_restart(self, tmp_path):
        storage = LocalStorage(tmp_path / "storage.json")
        cart = Cart(storage)
        cart.add(KURTA)
        cart.add(TEA)

        restored = Cart(LocalStorage(tmp_path / "storage.json"))
        assert restored.total == 800.0

    def test_corrupt_file_gives_empty_cart(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")
        assert Cart(LocalStorage(path)).is_empty

    def test_corrupt_lines_give_empty_cart(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text(json.dumps({f"storefront:{CART_KEY}": [{"name": "no id"}]}), encoding="utf-8")
        assert Cart(LocalStorage(path)).is_empty
