"""Tests for the User aggregate."""

import pytest
from protean.exceptions import ValidationError
from protean.utils import DomainObjects

from storefront.user.events import AdminGranted, UserLoggedIn, UserRegistered
from storefront.user.user import User, UserRole


def _register(**overrides):
    fields = {
        "full_name": "Asha Verma",
        "email": "Asha@Example.com",
        "password_hash": "$2b$04$hash",
    }
    fields.update(overrides)
    return User.register(**fields)


class TestRegistration:
    def test_element_type(self):
        assert User.element_type == DomainObjects.AGGREGATE

    def test_register_normalizes_email(self):
        user = _register()
        assert user.email == "asha@example.com"

    def test_register_defaults_to_customer_role(self):
        user = _register()
        assert user.role == UserRole.CUSTOMER.value
        assert not user.is_admin

    def test_register_sets_created_at(self):
        user = _register()
        assert user.created_at is not None
        assert user.last_login_at is None

    def test_register_raises_event(self):
        user = _register()
        assert len(user._events) == 1
        event = user._events[0]
        assert isinstance(event, UserRegistered)
        assert event.email == "asha@example.com"
        assert event.role == "customer"

    def test_register_admin(self):
        user = _register(role=UserRole.ADMIN.value)
        assert user.is_admin


class TestInputRules:
    def test_one_character_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(full_name="A")
        assert "full_name" in exc.value.messages

    def test_malformed_email_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(email="not-an-email")
        assert "email" in exc.value.messages

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(role="superuser")
        assert "role" in exc.value.messages


class TestLoginAndPromotion:
    def test_record_login(self):
        user = _register()
        user._events.clear()
        user.record_login()
        assert user.last_login_at is not None
        assert isinstance(user._events[-1], UserLoggedIn)

    def test_grant_admin(self):
        user = _register()
        user._events.clear()
        user.grant_admin()
        assert user.role == "admin"
        assert isinstance(user._events[-1], AdminGranted)

    def test_grant_admin_is_idempotent(self):
        user = _register(role="admin")
        user._events.clear()
        user.grant_admin()
        assert user._events == []

    def test_as_dict_omits_password_hash(self):
        data = _register().as_dict()
        assert "password_hash" not in data
        assert data["full_name"] == "Asha Verma"
