"""Integration tests for POST /checkout."""


def _body(address_fields, cart_lines, **overrides):
    body = {"address": address_fields, "payment_method": "cod", "products": cart_lines, "total_amount": 1300.0}
    body.update(overrides)
    return body


class TestCheckout:
    def test_cod_checkout(self, client, customer, address_fields, cart_lines):
        response = client.post("/checkout", json=_body(address_fields, cart_lines), headers=customer["headers"])
        assert response.status_code == 201, response.text
        result = response.json()
        assert result["order_status"] == "confirmed"
        assert result["payment_status"] == "completed"

        user_id = customer["user"]["id"]
        orders = client.get(f"/orders/{user_id}").json()["orders"]
        assert orders[0]["total_amount"] == 1300.0
        payments = client.get(f"/payments/{user_id}", headers=customer["headers"]).json()["payments"]
        assert payments[0]["payment_method"] == "cod"

    def test_requires_token(self, client, address_fields, cart_lines):
        assert client.post("/checkout", json=_body(address_fields, cart_lines)).status_code == 401

    def test_address_errors(self, client, customer, address_fields, cart_lines):
        bad = {**address_fields, "phone": "987654321", "pincode": "30200"}
        response = client.post("/checkout", json=_body(bad, cart_lines), headers=customer["headers"])
        assert response.status_code == 400
        assert set(response.json()["error"]) == {"phone", "pincode"}

    def test_gateway_checkout(self, client, customer, gateway, address_fields, cart_lines):
        order = client.post(
            "/payments/create-order",
            json={"amount": 1300.0, "receipt": "rcpt-9", "payment_method": "upi"},
            headers=customer["headers"],
        ).json()
        gateway_order_id = order["order"]["id"]
        gateway_payment_id, signature = gateway.simulate_payment(gateway_order_id)

        response = client.post(
            "/checkout",
            json=_body(
                address_fields,
                cart_lines,
                payment_method="upi",
                upi_id="asha@okaxis",
                gateway={
                    "gateway_order_id": gateway_order_id,
                    "gateway_payment_id": gateway_payment_id,
                    "signature": signature,
                },
            ),
            headers=customer["headers"],
        )
        assert response.status_code == 201
        assert response.json()["payment_id"] == order["payment_id"]
        assert response.json()["payment_status"] == "completed"

    def test_tampered_signature_creates_no_order(self, client, customer, gateway, address_fields, cart_lines):
        response = client.post(
            "/checkout",
            json=_body(
                address_fields,
                cart_lines,
                payment_method="upi",
                gateway={"gateway_order_id": "order_x", "gateway_payment_id": "pay_x", "signature": "forged"},
            ),
            headers=customer["headers"],
        )
        assert response.status_code == 400
        assert response.json()["code"] == "payment_verification_failed"
        assert client.get(f"/orders/{customer['user']['id']}").json()["orders"] == []


class TestGatewayReconciliation:
    def _signed_order(self, client, customer, gateway, amount):
        order = client.post(
            "/payments/create-order",
            json={"amount": amount, "receipt": "rcpt-10", "payment_method": "upi"},
            headers=customer["headers"],
        ).json()
        gateway_order_id = order["order"]["id"]
        gateway_payment_id, signature = gateway.simulate_payment(gateway_order_id)
        return {"gateway_order_id": gateway_order_id, "gateway_payment_id": gateway_payment_id, "signature": signature}

    def _orders(self, client, customer):
        return client.get(f"/orders/{customer['user']['id']}").json()["orders"]

    def _payments(self, client, customer):
        return client.get(f"/payments/{customer['user']['id']}", headers=customer["headers"]).json()["payments"]

    def test_gateway_order_for_a_smaller_amount(self, client, customer, gateway, address_fields, cart_lines):
        proof = self._signed_order(client, customer, gateway, amount=1.0)

        response = client.post(
            "/checkout",
            json=_body(address_fields, cart_lines, payment_method="upi", gateway=proof),
            headers=customer["headers"],
        )

        assert response.status_code == 400
        assert response.json()["code"] == "payment_verification_failed"
        assert self._orders(client, customer) == []
        assert [(p["amount"], p["status"]) for p in self._payments(client, customer)] == [(1.0, "pending")]

    def test_proof_cannot_be_reused(self, client, customer, gateway, address_fields, cart_lines):
        proof = self._signed_order(client, customer, gateway, amount=1300.0)
        body = _body(address_fields, cart_lines, payment_method="upi", gateway=proof)

        first = client.post("/checkout", json=body, headers=customer["headers"])
        second = client.post("/checkout", json=body, headers=customer["headers"])

        assert first.status_code == 201
        assert first.json()["transaction_id"] == proof["gateway_payment_id"]
        assert second.status_code == 400
        assert second.json()["code"] == "payment_verification_failed"
        assert len(self._orders(client, customer)) == 1
        assert [p["status"] for p in self._payments(client, customer)] == ["completed"]

    def test_gateway_order_of_another_shopper(self, client, customer, gateway, address_fields, cart_lines):
        proof = self._signed_order(client, customer, gateway, amount=1300.0)
        other = client.post(
            "/users/register",
            json={"full_name": "Ravi Kumar", "email": "ravi@example.com", "password": "s3cret!"},
        ).json()

        response = client.post(
            "/checkout",
            json=_body(address_fields, cart_lines, payment_method="upi", gateway=proof),
            headers={"Authorization": f"Bearer {other['token']}"},
        )

        assert response.status_code == 400
        assert self._orders(client, customer) == []
