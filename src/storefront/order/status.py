"""Order status updates by admins."""

from protean import handle
from protean.fields import Boolean, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_number = String(required=True, max_length=50)
    status = String(required=True, max_length=20)
    strict = Boolean(default=False)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_by_order_number(command.order_number)
        previous = order.status
        order.update_status(command.status, strict=bool(command.strict))
        repo.add(order)
        logger.info(
            "order_status_changed",
            order_number=order.order_number,
            previous_status=previous,
            new_status=order.status,
        )
        return order.status
