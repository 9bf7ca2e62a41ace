"""Configurable fake payment gateway for development and testing.

No external calls are made. Orders and refunds succeed or fail according to
``configure()``. ``simulate_payment`` stands in for the gateway's hosted
checkout by returning a payment id and a correctly signed callback signature.
Simulated payments are kept so ``fetch_payment`` can report them.
"""

import time
from uuid import uuid4

from storefront.errors import UpstreamGatewayError
from storefront.gateway.port import GatewayOrder, GatewayPayment, PaymentGateway, RefundResult, to_minor_units
from storefront.gateway.signature import compute_signature


class FakeGateway(PaymentGateway):
    name = "fake"

    def __init__(self, key_id: str = "fake_key", key_secret: str = "fake-gateway-secret") -> None:
        super().__init__(key_id=key_id, key_secret=key_secret)
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []
        self.orders: dict[str, GatewayOrder] = {}
        self.payments: dict[str, GatewayPayment] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_order(self, amount: float, receipt: str, currency: str = "INR", notes: dict | None = None) -> GatewayOrder:
        self.calls.append(
            {
                "method": "create_order",
                "amount": amount,
                "receipt": receipt,
                "currency": currency,
                "notes": notes or {},
            }
        )
        if not self.should_succeed:
            raise UpstreamGatewayError(self.failure_reason)

        order = GatewayOrder(
            id=f"order_fake_{uuid4().hex[:14]}",
            amount=to_minor_units(amount),
            currency=currency,
            receipt=receipt,
        )
        self.orders[order.id] = order
        return order

    def refund(self, gateway_payment_id: str, amount: float | None = None) -> RefundResult:
        self.calls.append(
            {
                "method": "refund",
                "gateway_payment_id": gateway_payment_id,
                "amount": amount,
            }
        )
        if not self.should_succeed:
            return RefundResult(success=False, status="failed", failure_reason=self.failure_reason)

        return RefundResult(
            success=True,
            gateway_refund_id=f"rfnd_fake_{uuid4().hex[:14]}",
            amount=to_minor_units(amount) if amount is not None else None,
            status="processed",
        )

    def fetch_payment(self, gateway_payment_id: str) -> GatewayPayment:
        self.calls.append({"method": "fetch_payment", "gateway_payment_id": gateway_payment_id})
        if not self.should_succeed:
            raise UpstreamGatewayError(self.failure_reason)
        if gateway_payment_id not in self.payments:
            raise UpstreamGatewayError(f"Payment {gateway_payment_id} does not exist")
        return self.payments[gateway_payment_id]

    def simulate_payment(self, gateway_order_id: str, method: str = "upi", vpa: str | None = None) -> tuple[str, str]:
        """Return ``(gateway_payment_id, signature)`` as the hosted checkout would."""
        gateway_payment_id = f"pay_fake_{uuid4().hex[:14]}"
        order = self.orders.get(gateway_order_id)
        self.payments[gateway_payment_id] = GatewayPayment(
            id=gateway_payment_id,
            order_id=gateway_order_id,
            amount=order.amount if order else 0,
            currency=order.currency if order else "INR",
            status="captured",
            method=method,
            vpa=vpa,
            created_at=int(time.time()),
        )
        return gateway_payment_id, compute_signature(self.key_secret, gateway_order_id, gateway_payment_id)
