"""Shared BDD fixtures and step definitions for checkout."""

import pytest
from pytest_bdd import given, parsers, then

from storefront.client.api import StorefrontClient
from storefront.client.cart import Cart
from storefront.client.checkout import CheckoutFlow, CheckoutState
from storefront.client.storage import LocalStorage


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def outcome():
    """Container for the last step's validation errors or raised exception."""
    return {"errors": {}, "exc": None}


@pytest.fixture()
def storage():
    return LocalStorage()


@pytest.fixture()
def shop(client, storage):
    return StorefrontClient(session=client, base_url="", storage=storage)


@pytest.fixture()
def cart(storage):
    return Cart(storage)


@pytest.fixture()
def flow(shop, cart):
    return CheckoutFlow(shop, cart)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered shopper", target_fixture="shopper")
def registered_shopper(shop):
    return shop.register("Asha Verma", "asha@example.com", "s3cret!")


@given(parsers.cfparse('the cart holds {quantity:d} "{name}" at {price:g}'))
def cart_holds(cart, quantity, name, price):
    product = {"id": name.lower().replace(" ", "-"), "name": name, "price": price}
    for _ in range(quantity):
        cart.add(product)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the checkout is in state "{state}"'))
def checkout_in_state(flow, state):
    assert flow.state is CheckoutState[state]


@then(parsers.cfparse('the step reports an error on "{field}"'))
def step_reports_error(outcome, field):
    assert field in outcome["errors"]


@then("the cart is empty")
def cart_is_empty(cart):
    assert cart.is_empty
    assert cart.total == 0
