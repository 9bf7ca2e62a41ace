"""Atomic checkout: address, payment and order in one unit of work.

The three records are built and validated first and only then handed to
their repositories, all inside the handler's unit of work. A failure at any
step leaves nothing behind. The separate ``POST /addresses``,
``POST /payments`` and ``POST /orders`` calls remain available for clients
that record them one by one.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.address.address import Address
from storefront.domain import logger, storefront
from storefront.order.order import Order
from storefront.order.placement import load_lines
from storefront.payment.payment import Payment
from storefront.payment.verification import settle_gateway_payment


@storefront.command(part_of="Order")
class CompleteCheckout:
    user_id = Identifier(required=True)

    full_name = String(max_length=100)
    phone = String(max_length=32)
    email = String(max_length=254)
    address = String(max_length=500)
    landmark = String(max_length=200)
    city = String(max_length=100)
    state = String(max_length=100)
    pincode = String(max_length=12)

    payment_method = String(required=True, max_length=30)
    transaction_id = String(max_length=64)
    upi_id = String(max_length=100)
    card_last4 = String(max_length=4)
    gateway_order_id = String(max_length=100)
    gateway_payment_id = String(max_length=100)
    payment_verified = Boolean(default=False)

    products = Text(required=True)  # JSON: list of line dicts
    total_amount = Float()


def _settle_payment(command, amount) -> Payment:
    """Reconcile a verified gateway payment with this order, or record a new payment."""
    if command.payment_verified and command.gateway_order_id:
        return settle_gateway_payment(
            user_id=command.user_id,
            gateway_order_id=command.gateway_order_id,
            gateway_payment_id=command.gateway_payment_id,
            amount=amount,
            payment_method=command.payment_method,
            upi_id=command.upi_id,
            card_last4=command.card_last4,
        )

    return Payment.record(
        user_id=command.user_id,
        payment_method=command.payment_method,
        amount=amount,
        transaction_id=command.transaction_id,
        upi_id=command.upi_id,
        card_last4=command.card_last4,
    )


@storefront.command_handler(part_of=Order)
class CompleteCheckoutHandler:
    @handle(CompleteCheckout)
    def complete_checkout(self, command):
        lines = load_lines(command.products)
        if not lines:
            raise ValidationError({"products": ["Cart is empty"]})

        line_total = round(sum(line["price"] * line.get("quantity", 1) for line in lines), 2)
        amount = line_total if command.total_amount is None else command.total_amount

        address = Address.record(
            user_id=command.user_id,
            full_name=command.full_name,
            phone=command.phone,
            email=command.email,
            address=command.address,
            landmark=command.landmark,
            city=command.city,
            state=command.state,
            pincode=command.pincode,
        )
        payment = _settle_payment(command, line_total)
        order = Order.place(
            user_id=command.user_id,
            lines=lines,
            address_id=address.id,
            payment_id=payment.id,
            total_amount=amount,
        )

        current_domain.repository_for(Address).add(address)
        current_domain.repository_for(Payment).add(payment)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "checkout_completed",
            order_number=order.order_number,
            payment_status=payment.status,
            total_amount=order.total_amount,
        )
        return {
            "order_number": order.order_number,
            "order_id": str(order.id),
            "address_id": str(address.id),
            "payment_id": str(payment.id),
            "transaction_id": payment.transaction_id,
            "payment_status": payment.status,
            "order_status": order.status,
            "total_amount": order.total_amount,
        }
