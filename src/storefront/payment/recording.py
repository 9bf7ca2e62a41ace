"""Payment recording: command and handler.

The handler trusts ``verified``; callers set it only after checking the
gateway signature.
"""

from protean import handle
from protean.fields import Boolean, Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.payment.payment import Payment


@storefront.command(part_of="Payment")
class RecordPayment:
    user_id = Identifier(required=True)
    payment_method = String(required=True, max_length=30)
    amount = Float(required=True)
    transaction_id = String(max_length=64)
    upi_id = String(max_length=100)
    card_last4 = String(max_length=4)
    gateway_order_id = String(max_length=100)
    gateway_payment_id = String(max_length=100)
    verified = Boolean(default=False)


def payment_from_command(command) -> Payment:
    return Payment.record(
        user_id=command.user_id,
        payment_method=command.payment_method,
        amount=command.amount,
        transaction_id=command.transaction_id,
        upi_id=command.upi_id,
        card_last4=command.card_last4,
        gateway_order_id=command.gateway_order_id,
        gateway_payment_id=command.gateway_payment_id,
        verified=bool(command.verified),
    )


@storefront.command_handler(part_of=Payment)
class RecordPaymentHandler:
    @handle(RecordPayment)
    def record_payment(self, command):
        payment = payment_from_command(command)
        current_domain.repository_for(Payment).add(payment)
        logger.info(
            "payment_recorded",
            payment_id=str(payment.id),
            method=payment.payment_method,
            status=payment.status,
        )
        return str(payment.id)
