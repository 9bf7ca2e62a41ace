"""Payment gateway port (abstract interface).

The storefront opens orders at the gateway, verifies the gateway's callback
signature, looks up captured payments and issues refunds through it. Adapters:
``FakeGateway`` for development and tests, ``RazorpayGateway`` for the live
API through the razorpay SDK.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.gateway.signature import verify_signature


@dataclass(frozen=True)
class GatewayOrder:
    """An order handle opened at the gateway. ``amount`` is in minor units (paise)."""

    id: str
    amount: int
    currency: str
    receipt: str
    status: str = "created"


@dataclass(frozen=True)
class GatewayPayment:
    """A payment as the gateway reports it. ``amount`` is in minor units."""

    id: str
    order_id: str | None
    amount: int
    currency: str
    status: str
    method: str | None = None
    vpa: str | None = None
    email: str | None = None
    contact: str | None = None
    created_at: int | None = None


@dataclass(frozen=True)
class RefundResult:
    success: bool
    gateway_refund_id: str | None = None
    amount: int | None = None
    status: str | None = None
    failure_reason: str | None = None


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    name = "gateway"

    def __init__(self, key_id: str, key_secret: str) -> None:
        self.key_id = key_id
        self.key_secret = key_secret

    @abstractmethod
    def create_order(self, amount: float, receipt: str, currency: str = "INR", notes: dict | None = None) -> GatewayOrder:
        """Open an order handle for ``amount`` (major units).

        Raises ``UpstreamGatewayError`` when the gateway call fails.
        """
        ...

    @abstractmethod
    def refund(self, gateway_payment_id: str, amount: float | None = None) -> RefundResult:
        """Refund a captured payment in full, or partially when ``amount`` is given."""
        ...

    @abstractmethod
    def fetch_payment(self, gateway_payment_id: str) -> GatewayPayment:
        """Look up a payment by its gateway id.

        Raises ``UpstreamGatewayError`` when the gateway call fails or the id is unknown.
        """
        ...

    def verify_signature(self, gateway_order_id: str, gateway_payment_id: str, signature: str) -> bool:
        return verify_signature(self.key_secret, gateway_order_id, gateway_payment_id, signature)
