"""Domain events for the Payment aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Payment")
class PaymentRecorded:
    """A payment attempt was written to the payment log."""

    __version__ = 1

    payment_id = Identifier(required=True)
    transaction_id = String(required=True)
    user_id = Identifier(required=True)
    payment_method = String(required=True)
    amount = Float(required=True)
    status = String(required=True)
    recorded_at = DateTime(required=True)


@storefront.event(part_of="Payment")
class PaymentCompleted:
    """Funds were confirmed, either by a verified gateway callback or by an offline method."""

    __version__ = 1

    payment_id = Identifier(required=True)
    transaction_id = String(required=True)
    gateway_payment_id = String()
    completed_at = DateTime(required=True)


@storefront.event(part_of="Payment")
class PaymentRefunded:
    __version__ = 1

    payment_id = Identifier(required=True)
    transaction_id = String(required=True)
    amount = Float(required=True)
    refund_id = String()
    refunded_at = DateTime(required=True)
