import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("BCRYPT_ROUNDS", "4")

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# HTTP application
# ---------------------------------------------------------------------------
ADMIN_EMAIL = "admin@example.com"
GATEWAY_SECRET = "test-gateway-secret"


@pytest.fixture()
def settings():
    from storefront.config import Settings

    return Settings(
        environment="test",
        jwt_secret="test-jwt-secret",
        bcrypt_rounds=4,
        admin_emails=frozenset({ADMIN_EMAIL}),
        rate_limit_enabled=False,
        gateway_key_secret=GATEWAY_SECRET,
    )


@pytest.fixture()
def gateway():
    from storefront.gateway import FakeGateway

    return FakeGateway(key_id="test_key", key_secret=GATEWAY_SECRET)


@pytest.fixture()
def app(settings, gateway):
    from storefront.app import create_app

    return create_app(settings=settings, gateway=gateway, init_domain=False)


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


def _register(client, full_name, email, password="s3cret!"):
    response = client.post(
        "/users/register",
        json={"full_name": full_name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return {
        "token": body["token"],
        "user": body["user"],
        "headers": {"Authorization": f"Bearer {body['token']}"},
    }


@pytest.fixture()
def customer(client):
    """A registered shopper: ``{"token", "user", "headers"}``."""
    return _register(client, "Asha Verma", "asha@example.com")


@pytest.fixture()
def admin(client):
    """A registered admin (their email is on the admin list)."""
    return _register(client, "Store Admin", ADMIN_EMAIL)


@pytest.fixture()
def address_fields():
    return {
        "full_name": "Asha Verma",
        "phone": "98765 43210",
        "email": "asha@example.com",
        "address": "12 MI Road",
        "landmark": "Near Panch Batti",
        "city": "Jaipur",
        "state": "Rajasthan",
        "pincode": "302001",
    }


@pytest.fixture()
def cart_lines():
    """Two kurtas at 500 and one rose tea at 300: 1300 in total."""
    return [
        {"product_id": "p-kurta", "name": "Block Print Kurta", "price": 500.0, "quantity": 2, "image": None},
        {"product_id": "p-tea", "name": "Rose Tea", "price": 300.0, "quantity": 1, "image": None},
    ]
