"""Payment refund: command and handler.

Gateway-captured payments are refunded at the gateway by the API layer before
this command is issued; ``refund_id`` then carries the gateway's reference.
"""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.payment.payment import Payment


@storefront.command(part_of="Payment")
class RefundPayment:
    payment_id = Identifier(required=True)
    amount = Float()
    refund_id = String(max_length=100)


@storefront.command_handler(part_of=Payment)
class RefundPaymentHandler:
    @handle(RefundPayment)
    def refund_payment(self, command):
        repo = current_domain.repository_for(Payment)
        payment = repo.get(command.payment_id)
        payment.refund(amount=command.amount, refund_id=command.refund_id)
        repo.add(payment)
        logger.info(
            "payment_refunded",
            payment_id=str(payment.id),
            amount=payment.refunded_amount,
            manual=command.refund_id is None,
        )
        return str(payment.id)
