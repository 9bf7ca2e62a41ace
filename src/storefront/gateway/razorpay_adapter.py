"""Razorpay adapter over the official ``razorpay`` SDK.

Orders are opened with the amount in paise and the storefront order number as
the receipt. Refunds and payment lookups go through ``client.payment``. SDK
errors (4xx, 5xx, transport failures) surface as ``UpstreamGatewayError``.
"""

import razorpay
import requests
from razorpay.errors import BadRequestError, GatewayError, ServerError

from storefront.domain import logger
from storefront.errors import UpstreamGatewayError
from storefront.gateway.port import GatewayOrder, GatewayPayment, PaymentGateway, RefundResult, to_minor_units

SDK_ERRORS = (BadRequestError, GatewayError, ServerError, requests.RequestException)


class RazorpayGateway(PaymentGateway):
    name = "razorpay"

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        client: razorpay.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        super().__init__(key_id=key_id, key_secret=key_secret)
        self.client = client or razorpay.Client(auth=(key_id, key_secret))
        self.timeout = timeout

    def _call(self, operation: str, func, *args, **kwargs) -> dict:
        try:
            return func(*args, timeout=self.timeout, **kwargs)
        except SDK_ERRORS as exc:
            logger.error("gateway_request_failed", gateway=self.name, operation=operation, error=str(exc))
            raise UpstreamGatewayError(f"Gateway request failed: {exc}") from exc

    def create_order(self, amount: float, receipt: str, currency: str = "INR", notes: dict | None = None) -> GatewayOrder:
        body = self._call(
            "create_order",
            self.client.order.create,
            data={
                "amount": to_minor_units(amount),
                "currency": currency,
                "receipt": receipt,
                "notes": notes or {},
            },
        )
        return GatewayOrder(
            id=body["id"],
            amount=body["amount"],
            currency=body["currency"],
            receipt=body.get("receipt", receipt),
            status=body.get("status", "created"),
        )

    def refund(self, gateway_payment_id: str, amount: float | None = None) -> RefundResult:
        data = {}
        if amount is not None:
            data["amount"] = to_minor_units(amount)
        try:
            body = self._call("refund", self.client.payment.refund, gateway_payment_id, data)
        except UpstreamGatewayError as exc:
            return RefundResult(success=False, status="failed", failure_reason=exc.message)

        return RefundResult(
            success=True,
            gateway_refund_id=body["id"],
            amount=body.get("amount"),
            status=body.get("status"),
        )

    def fetch_payment(self, gateway_payment_id: str) -> GatewayPayment:
        body = self._call("fetch_payment", self.client.payment.fetch, gateway_payment_id)
        return GatewayPayment(
            id=body["id"],
            order_id=body.get("order_id"),
            amount=body["amount"],
            currency=body.get("currency", "INR"),
            status=body["status"],
            method=body.get("method"),
            vpa=body.get("vpa"),
            email=body.get("email"),
            contact=body.get("contact"),
            created_at=body.get("created_at"),
        )
