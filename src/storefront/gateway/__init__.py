"""Payment gateway factory.

``build_gateway`` picks an adapter from settings. The instance is owned by
the application (``app.state.gateway``), not by this module, so tests can pass
their own adapter to ``create_app``.
"""

from storefront.config import Settings
from storefront.gateway.fake_adapter import FakeGateway
from storefront.gateway.port import PaymentGateway
from storefront.gateway.razorpay_adapter import RazorpayGateway


def build_gateway(settings: Settings) -> PaymentGateway:
    if settings.payment_gateway == "razorpay":
        return RazorpayGateway(
            key_id=settings.gateway_key_id,
            key_secret=settings.gateway_key_secret,
            timeout=settings.gateway_timeout_seconds,
        )
    return FakeGateway(key_id=settings.gateway_key_id or "fake_key", key_secret=settings.gateway_key_secret)


__all__ = ["FakeGateway", "PaymentGateway", "RazorpayGateway", "build_gateway"]
