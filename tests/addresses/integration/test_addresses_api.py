"""Integration tests for the address book endpoints."""


class TestRecordAddress:
    def test_record(self, client, customer, address_fields):
        response = client.post("/addresses", json={"user_id": customer["user"]["id"], **address_fields})
        assert response.status_code == 201
        body = response.json()
        assert body["phone"] == "9876543210"
        assert body["pincode"] == "302001"

    def test_field_errors(self, client, customer, address_fields):
        response = client.post(
            "/addresses",
            json={"user_id": customer["user"]["id"], **address_fields, "phone": "12345", "email": "bad"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "validation_error"
        assert set(body["error"]) == {"phone", "email"}


class TestListAddresses:
    def test_own_addresses(self, client, customer, address_fields):
        user_id = customer["user"]["id"]
        client.post("/addresses", json={"user_id": user_id, **address_fields})
        response = client.get(f"/addresses/{user_id}", headers=customer["headers"])
        assert response.status_code == 200
        assert len(response.json()["addresses"]) == 1

    def test_requires_token(self, client, customer):
        assert client.get(f"/addresses/{customer['user']['id']}").status_code == 401

    def test_other_users_addresses_forbidden(self, client, customer, address_fields):
        other = client.post(
            "/users/register",
            json={"full_name": "Ravi Kumar", "email": "ravi@example.com", "password": "s3cret!"},
        ).json()
        response = client.get(
            f"/addresses/{customer['user']['id']}",
            headers={"Authorization": f"Bearer {other['token']}"},
        )
        assert response.status_code == 403

    def test_admin_reads_any(self, client, customer, admin, address_fields):
        user_id = customer["user"]["id"]
        client.post("/addresses", json={"user_id": user_id, **address_fields})
        response = client.get(f"/addresses/{user_id}", headers=admin["headers"])
        assert len(response.json()["addresses"]) == 1
