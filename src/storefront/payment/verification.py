"""Settling a gateway payment after its callback signature has been verified.

A valid signature only proves the gateway issued the payment id for the
gateway order. Before the payment counts, it is reconciled against what the
storefront recorded:

* a gateway payment id settles at most one payment;
* the pending payment logged by ``POST /payments/create-order`` must belong
  to the caller and must be for the amount being paid.

If no pending payment exists for the gateway order, a new completed payment
is recorded, keyed on the gateway payment id.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.errors import PaymentVerificationFailed
from storefront.payment.payment import Payment, PaymentStatus

AMOUNT_TOLERANCE = 0.01


@storefront.command(part_of="Payment")
class CompleteGatewayPayment:
    gateway_order_id = String(required=True, max_length=100)
    gateway_payment_id = String(required=True, max_length=100)
    user_id = Identifier(required=True)
    payment_method = String(max_length=30)
    amount = Float()


def _reject(reason: str, **fields) -> PaymentVerificationFailed:
    logger.warning("gateway_payment_rejected", reason=reason, **fields)
    return PaymentVerificationFailed(reason)


def settle_gateway_payment(
    user_id,
    gateway_order_id: str,
    gateway_payment_id: str,
    amount: float | None = None,
    payment_method: str | None = None,
    upi_id: str | None = None,
    card_last4: str | None = None,
) -> Payment:
    """Return the completed payment for a verified gateway callback.

    The payment is not persisted; the caller adds it to the repository inside
    its own unit of work. ``amount`` is what the caller is paying for and, when
    given, must match the pending payment.
    """
    repo = current_domain.repository_for(Payment)

    if repo.find_by_gateway_payment_id(gateway_payment_id) or repo.find_by_transaction_id(gateway_payment_id):
        raise _reject("This gateway payment has already been used", gateway_payment_id=gateway_payment_id)

    pending = repo.find_by_gateway_order_id(gateway_order_id)
    if pending is None:
        if not payment_method or not amount:
            raise ValidationError(
                {"gateway_order_id": ["No pending payment for this gateway order; method and amount are required"]}
            )
        return Payment.record(
            user_id=user_id,
            payment_method=payment_method,
            amount=amount,
            transaction_id=gateway_payment_id,
            upi_id=upi_id,
            card_last4=card_last4,
            gateway_order_id=gateway_order_id,
            gateway_payment_id=gateway_payment_id,
            verified=True,
        )

    if str(pending.user_id) != str(user_id):
        raise _reject("This gateway order belongs to another account", gateway_order_id=gateway_order_id)
    if pending.status != PaymentStatus.PENDING.value:
        raise _reject("This gateway order has already been paid", gateway_order_id=gateway_order_id)
    if amount is not None and abs(pending.amount - amount) > AMOUNT_TOLERANCE:
        raise _reject(
            f"Gateway order was opened for {pending.amount}, not {amount}",
            gateway_order_id=gateway_order_id,
        )

    pending.complete(gateway_payment_id=gateway_payment_id)
    return pending


@storefront.command_handler(part_of=Payment)
class CompleteGatewayPaymentHandler:
    @handle(CompleteGatewayPayment)
    def complete_gateway_payment(self, command):
        payment = settle_gateway_payment(
            user_id=command.user_id,
            gateway_order_id=command.gateway_order_id,
            gateway_payment_id=command.gateway_payment_id,
            amount=command.amount,
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Payment).add(payment)
        logger.info("gateway_payment_completed", payment_id=str(payment.id))
        return str(payment.id)
