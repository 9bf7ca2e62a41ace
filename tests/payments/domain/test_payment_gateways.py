"""Tests for callback signatures and the gateway adapters."""

from unittest.mock import Mock

import pytest
import requests
from razorpay.errors import BadRequestError, ServerError

from storefront.config import Settings
from storefront.errors import UpstreamGatewayError
from storefront.gateway import FakeGateway, RazorpayGateway, build_gateway
from storefront.gateway.port import GatewayOrder, GatewayPayment, RefundResult, to_minor_units
from storefront.gateway.signature import compute_signature, verify_signature


class TestSignature:
    def test_round_trip(self):
        signature = compute_signature("secret", "order_1", "pay_1")
        assert verify_signature("secret", "order_1", "pay_1", signature)

    def test_hex_digest(self):
        signature = compute_signature("secret", "order_1", "pay_1")
        assert len(signature) == 64
        assert signature == signature.lower()

    def test_tampered_signature(self):
        signature = compute_signature("secret", "order_1", "pay_1")
        tampered = ("0" if signature[0] != "0" else "1") + signature[1:]
        assert not verify_signature("secret", "order_1", "pay_1", tampered)

    def test_wrong_payment_id(self):
        signature = compute_signature("secret", "order_1", "pay_1")
        assert not verify_signature("secret", "order_1", "pay_2", signature)

    def test_wrong_secret(self):
        signature = compute_signature("other", "order_1", "pay_1")
        assert not verify_signature("secret", "order_1", "pay_1", signature)

    def test_missing_parts(self):
        assert not verify_signature("secret", "order_1", "pay_1", None)
        assert not verify_signature("", "order_1", "pay_1", "abc")


class TestFakeGateway:
    def test_create_order_in_minor_units(self):
        gateway = FakeGateway()
        order = gateway.create_order(amount=1300.5, receipt="rcpt-1")
        assert isinstance(order, GatewayOrder)
        assert order.amount == 130050
        assert order.currency == "INR"
        assert order.id.startswith("order_fake_")
        assert gateway.calls[-1]["method"] == "create_order"

    def test_configured_failure(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False, failure_reason="Bank down")
        with pytest.raises(UpstreamGatewayError, match="Bank down"):
            gateway.create_order(amount=10, receipt="rcpt-1")

    def test_refund(self):
        result = FakeGateway().refund("pay_1", amount=100.0)
        assert isinstance(result, RefundResult)
        assert result.success
        assert result.amount == 10000

    def test_failed_refund(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False)
        result = gateway.refund("pay_1")
        assert not result.success
        assert result.failure_reason == "Gateway unavailable"

    def test_simulated_payment_verifies(self):
        gateway = FakeGateway(key_secret="s3")
        order = gateway.create_order(amount=10, receipt="rcpt-1")
        payment_id, signature = gateway.simulate_payment(order.id)
        assert gateway.verify_signature(order.id, payment_id, signature)

    def test_simulated_payment_can_be_fetched(self):
        gateway = FakeGateway()
        order = gateway.create_order(amount=1300, receipt="rcpt-1")
        payment_id, _ = gateway.simulate_payment(order.id, method="upi", vpa="asha@okaxis")

        payment = gateway.fetch_payment(payment_id)

        assert isinstance(payment, GatewayPayment)
        assert payment.order_id == order.id
        assert payment.amount == 130000
        assert payment.status == "captured"
        assert payment.vpa == "asha@okaxis"

    def test_fetch_unknown_payment(self):
        with pytest.raises(UpstreamGatewayError, match="does not exist"):
            FakeGateway().fetch_payment("pay_missing")

    def test_fetch_when_gateway_down(self):
        gateway = FakeGateway()
        order = gateway.create_order(amount=10, receipt="rcpt-1")
        payment_id, _ = gateway.simulate_payment(order.id)
        gateway.configure(should_succeed=False)
        with pytest.raises(UpstreamGatewayError):
            gateway.fetch_payment(payment_id)


class TestRazorpayGateway:
    def _gateway(self):
        client = Mock()
        return RazorpayGateway(key_id="rzp_test", key_secret="secret", client=client, timeout=5.0), client

    def test_create_order(self):
        gateway, client = self._gateway()
        client.order.create.return_value = {
            "id": "order_rzp_1",
            "amount": 130000,
            "currency": "INR",
            "receipt": "rcpt-1",
            "status": "created",
        }

        order = gateway.create_order(amount=1300, receipt="rcpt-1", notes={"email": "asha@example.com"})

        assert order.id == "order_rzp_1"
        kwargs = client.order.create.call_args.kwargs
        assert kwargs["data"] == {
            "amount": 130000,
            "currency": "INR",
            "receipt": "rcpt-1",
            "notes": {"email": "asha@example.com"},
        }
        assert kwargs["timeout"] == 5.0

    def test_create_order_rejected(self):
        gateway, client = self._gateway()
        client.order.create.side_effect = BadRequestError("Authentication failed")
        with pytest.raises(UpstreamGatewayError, match="Authentication failed"):
            gateway.create_order(amount=1300, receipt="rcpt-1")

    def test_create_order_unreachable(self):
        gateway, client = self._gateway()
        client.order.create.side_effect = requests.ConnectionError("down")
        with pytest.raises(UpstreamGatewayError):
            gateway.create_order(amount=1300, receipt="rcpt-1")

    def test_partial_refund(self):
        gateway, client = self._gateway()
        client.payment.refund.return_value = {"id": "rfnd_1", "amount": 5000, "status": "processed"}

        result = gateway.refund("pay_1", amount=50)

        assert result.success
        assert result.gateway_refund_id == "rfnd_1"
        assert client.payment.refund.call_args.args == ("pay_1", {"amount": 5000})

    def test_full_refund_sends_no_amount(self):
        gateway, client = self._gateway()
        client.payment.refund.return_value = {"id": "rfnd_2", "amount": 130000, "status": "processed"}
        gateway.refund("pay_1")
        assert client.payment.refund.call_args.args == ("pay_1", {})

    def test_refund_failure_is_a_result(self):
        gateway, client = self._gateway()
        client.payment.refund.side_effect = ServerError("upstream 503")
        result = gateway.refund("pay_1")
        assert not result.success
        assert result.status == "failed"
        assert "upstream 503" in result.failure_reason

    def test_fetch_payment(self):
        gateway, client = self._gateway()
        client.payment.fetch.return_value = {
            "id": "pay_1",
            "entity": "payment",
            "order_id": "order_rzp_1",
            "amount": 130000,
            "currency": "INR",
            "status": "captured",
            "method": "upi",
            "vpa": "asha@okaxis",
            "email": "asha@example.com",
            "contact": "+919876543210",
            "created_at": 1781500000,
        }

        payment = gateway.fetch_payment("pay_1")

        assert payment == GatewayPayment(
            id="pay_1",
            order_id="order_rzp_1",
            amount=130000,
            currency="INR",
            status="captured",
            method="upi",
            vpa="asha@okaxis",
            email="asha@example.com",
            contact="+919876543210",
            created_at=1781500000,
        )
        client.payment.fetch.assert_called_once_with("pay_1", timeout=5.0)

    def test_fetch_unknown_payment(self):
        gateway, client = self._gateway()
        client.payment.fetch.side_effect = BadRequestError("The id provided does not exist")
        with pytest.raises(UpstreamGatewayError, match="does not exist"):
            gateway.fetch_payment("pay_missing")


class TestBuildGateway:
    def test_fake_by_default(self):
        assert isinstance(build_gateway(Settings()), FakeGateway)

    def test_razorpay(self):
        gateway = build_gateway(Settings(payment_gateway="razorpay", gateway_key_id="rzp_live", gateway_key_secret="k"))
        assert isinstance(gateway, RazorpayGateway)
        assert gateway.key_id == "rzp_live"

    def test_minor_units_rounding(self):
        assert to_minor_units(19.99) == 1999
