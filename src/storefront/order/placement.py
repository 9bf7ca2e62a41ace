"""Order placement: command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    products = Text(required=True)  # JSON: list of line dicts
    address_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    total_amount = Float()
    order_number = String(max_length=50)


def load_lines(products) -> list[dict]:
    return json.loads(products) if isinstance(products, str) else list(products or [])


def order_from_command(command, payment_id=None, address_id=None) -> Order:
    return Order.place(
        user_id=command.user_id,
        lines=load_lines(command.products),
        address_id=address_id or command.address_id,
        payment_id=payment_id or command.payment_id,
        total_amount=command.total_amount,
        order_number=command.order_number,
    )


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = order_from_command(command)
        current_domain.repository_for(Order).add(order)
        logger.info(
            "order_placed",
            order_number=order.order_number,
            user_id=str(order.user_id),
            total_amount=order.total_amount,
        )
        return order.order_number
