from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id: str) -> list[Order]:
        orders = self._dao.query.filter(user_id=str(user_id)).all().items
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def list_all(self) -> list[Order]:
        return sorted(self._dao.query.all().items, key=lambda o: o.created_at, reverse=True)

    def get_by_order_number(self, order_number: str) -> Order:
        order = self._dao.query.filter(order_number=order_number).all().first
        if order is None:
            raise ObjectNotFoundError(f"Order {order_number} does not exist")
        return order
