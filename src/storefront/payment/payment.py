"""Payment aggregate: one entry in the append-only payment log.

State Machine:
    PENDING → COMPLETED → REFUNDED

Offline methods (cash on delivery, direct transfer) are recorded straight
into COMPLETED. Gateway methods start PENDING unless the gateway's callback
signature has already been verified.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront
from storefront.payment.events import PaymentCompleted, PaymentRecorded, PaymentRefunded
from storefront.payment.methods import (
    PaymentMethodId,
    UnknownPaymentMethod,
    mint_transaction_id,
    requires_gateway,
    resolve_method,
)


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"


_VALID_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.COMPLETED},
    PaymentStatus.COMPLETED: {PaymentStatus.REFUNDED},
    PaymentStatus.REFUNDED: set(),  # Terminal
}


def resolve_payment_method(method) -> PaymentMethodId:
    """Like ``resolve_method`` but reports unknown methods as a field error."""
    try:
        return resolve_method(method)
    except UnknownPaymentMethod as exc:
        raise ValidationError({"payment_method": [str(exc)]}) from exc


@storefront.aggregate
class Payment:
    transaction_id = String(required=True, max_length=64, unique=True)
    user_id = Identifier(required=True)
    payment_method = String(required=True, max_length=30, choices=PaymentMethodId)
    amount = Float(required=True)
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    upi_id = String(max_length=100)
    card_last4 = String(max_length=4)
    gateway_order_id = String(max_length=100)
    gateway_payment_id = String(max_length=100)
    refund_id = String(max_length=100)
    refunded_amount = Float()
    created_at = DateTime()
    completed_at = DateTime()
    refunded_at = DateTime()

    @invariant.post
    def amount_is_positive(self):
        if self.amount is not None and self.amount <= 0:
            raise ValidationError({"amount": ["Amount must be greater than 0"]})

    @classmethod
    def record(
        cls,
        user_id,
        payment_method,
        amount,
        transaction_id=None,
        upi_id=None,
        card_last4=None,
        gateway_order_id=None,
        gateway_payment_id=None,
        verified=False,
    ):
        """Record a payment attempt.

        ``verified`` marks a gateway payment whose callback signature has
        already been checked; such payments are recorded as completed.
        """
        method = resolve_payment_method(payment_method)
        now = datetime.now(UTC)
        settled = verified or not requires_gateway(method)
        status = PaymentStatus.COMPLETED if settled else PaymentStatus.PENDING

        payment = cls(
            transaction_id=transaction_id or mint_transaction_id(method, now=now),
            user_id=user_id,
            payment_method=method.value,
            amount=round(amount, 2) if amount is not None else None,
            status=status.value,
            upi_id=upi_id,
            card_last4=card_last4,
            gateway_order_id=gateway_order_id,
            gateway_payment_id=gateway_payment_id,
            created_at=now,
            completed_at=now if settled else None,
        )
        payment.raise_(
            PaymentRecorded(
                payment_id=payment.id,
                transaction_id=payment.transaction_id,
                user_id=user_id,
                payment_method=payment.payment_method,
                amount=payment.amount,
                status=payment.status,
                recorded_at=now,
            )
        )
        return payment

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status: PaymentStatus) -> None:
        current = PaymentStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def complete(self, gateway_payment_id: str | None = None) -> None:
        """Mark a pending gateway payment as settled after signature verification.

        The gateway payment id becomes the transaction id, so it can settle only one payment.
        """
        self._assert_can_transition(PaymentStatus.COMPLETED)
        now = datetime.now(UTC)
        self.status = PaymentStatus.COMPLETED.value
        self.completed_at = now
        if gateway_payment_id:
            self.gateway_payment_id = gateway_payment_id
            self.transaction_id = gateway_payment_id
        self.raise_(
            PaymentCompleted(
                payment_id=self.id,
                transaction_id=self.transaction_id,
                gateway_payment_id=gateway_payment_id,
                completed_at=now,
            )
        )

    def refundable_amount(self, amount: float | None = None) -> float:
        """Validate a refund request and return the amount that would be refunded."""
        self._assert_can_transition(PaymentStatus.REFUNDED)
        if amount is None:
            return self.amount
        if amount <= 0:
            raise ValidationError({"amount": ["Refund amount must be greater than 0"]})
        if amount > self.amount:
            raise ValidationError({"amount": [f"Refund amount cannot exceed payment amount {self.amount}"]})
        return round(amount, 2)

    def refund(self, amount: float | None = None, refund_id: str | None = None) -> None:
        refunded = self.refundable_amount(amount)
        now = datetime.now(UTC)
        self.status = PaymentStatus.REFUNDED.value
        self.refunded_amount = refunded
        self.refund_id = refund_id
        self.refunded_at = now
        self.raise_(
            PaymentRefunded(
                payment_id=self.id,
                transaction_id=self.transaction_id,
                amount=refunded,
                refund_id=refund_id,
                refunded_at=now,
            )
        )

    def as_dict(self) -> dict:
        return {
            "id": str(self.id),
            "transaction_id": self.transaction_id,
            "user_id": str(self.user_id),
            "payment_method": self.payment_method,
            "amount": self.amount,
            "status": self.status,
            "upi_id": self.upi_id,
            "card_last4": self.card_last4,
            "gateway_order_id": self.gateway_order_id,
            "gateway_payment_id": self.gateway_payment_id,
            "refunded_amount": self.refunded_amount,
            "created_at": self.created_at,
        }
