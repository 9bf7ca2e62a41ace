"""Integration tests for the account and token endpoints."""

from storefront.auth.rate_limit import SlidingWindowRateLimiter
from storefront.app import create_app


class TestRegister:
    def test_register(self, client):
        response = client.post(
            "/users/register",
            json={"full_name": "Asha Verma", "email": "asha@example.com", "password": "s3cret!"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "asha@example.com"
        assert "password_hash" not in body["user"]

    def test_duplicate_email(self, client, customer):
        response = client.post(
            "/users/register",
            json={"full_name": "Someone Else", "email": "asha@example.com", "password": "s3cret!"},
        )
        assert response.status_code == 409
        assert response.json()["code"] == "duplicate_email"

    def test_field_errors(self, client):
        response = client.post(
            "/users/register",
            json={"full_name": "A", "email": "asha@example.com", "password": "s3cret!"},
        )
        assert response.status_code == 400
        assert "full_name" in response.json()["error"]

    def test_missing_field_is_a_400(self, client):
        response = client.post("/users/register", json={"email": "asha@example.com"})
        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"


class TestLoginAndVerify:
    def test_login(self, client, customer):
        response = client.post("/users/login", json={"email": "asha@example.com", "password": "s3cret!"})
        assert response.status_code == 200
        assert response.json()["user"]["id"] == customer["user"]["id"]

    def test_wrong_password(self, client, customer):
        response = client.post("/users/login", json={"email": "asha@example.com", "password": "nope-nope"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password", "code": "invalid_credentials"}

    def test_verify(self, client, customer):
        response = client.post("/auth/verify", headers=customer["headers"])
        assert response.status_code == 200
        assert response.json()["claims"]["email"] == "asha@example.com"

    def test_verify_without_token(self, client):
        response = client.post("/auth/verify")
        assert response.status_code == 401
        assert response.json()["code"] == "invalid_token"

    def test_verify_with_garbage_token(self, client):
        response = client.post("/auth/verify", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401


class TestAdminConsole:
    def test_list_users_requires_admin(self, client, customer):
        response = client.get("/users", headers=customer["headers"])
        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"

    def test_list_users(self, client, customer, admin):
        response = client.get("/users", headers=admin["headers"])
        assert response.status_code == 200
        emails = [u["email"] for u in response.json()["users"]]
        assert emails == ["asha@example.com", "admin@example.com"]

    def test_user_detail(self, client, customer, admin, address_fields):
        user_id = customer["user"]["id"]
        client.post("/addresses", json={"user_id": user_id, **address_fields})

        response = client.get(f"/users/{user_id}", headers=admin["headers"])
        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == user_id
        assert len(body["addresses"]) == 1
        assert body["orders"] == []
        assert body["payments"] == []

    def test_user_detail_unknown(self, client, admin):
        response = client.get("/users/unknown-id", headers=admin["headers"])
        assert response.status_code == 404

    def test_delete_user_leaves_dependents(self, client, customer, admin, address_fields):
        user_id = customer["user"]["id"]
        client.post("/addresses", json={"user_id": user_id, **address_fields})

        response = client.delete(f"/users/{user_id}", headers=admin["headers"])
        assert response.status_code == 200
        assert response.json() == {"status": "deleted"}

        emails = [u["email"] for u in client.get("/users", headers=admin["headers"]).json()["users"]]
        assert "asha@example.com" not in emails
        addresses = client.get(f"/addresses/{user_id}", headers=admin["headers"]).json()["addresses"]
        assert len(addresses) == 1


class TestRateLimiting:
    def test_login_is_rate_limited(self, settings, gateway):
        from fastapi.testclient import TestClient

        limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60)
        client = TestClient(create_app(settings=settings, gateway=gateway, rate_limiter=limiter, init_domain=False))

        payload = {"email": "nobody@example.com", "password": "s3cret!"}
        assert client.post("/users/login", json=payload).status_code == 401
        assert client.post("/users/login", json=payload).status_code == 401
        response = client.post("/users/login", json=payload)
        assert response.status_code == 429
        assert response.json()["code"] == "rate_limited"


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["version"]
