"""Order aggregate: a completed checkout.

An order snapshots the purchased products as lines at the moment of
checkout, so later catalog changes never alter it. ``total_amount`` must equal
the sum of the line totals.

Status updates overwrite the status unconditionally by default. When strict
mode is requested, only the transitions below are accepted:

    CONFIRMED → SHIPPED → DELIVERED
    CONFIRMED/SHIPPED → CANCELLED
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged

# Totals are compared to the paisa
_TOTAL_TOLERANCE = 0.005


class OrderStatus(Enum):
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def new_order_number() -> str:
    return f"ORD-{uuid4().hex[:12].upper()}"


def lines_total(lines) -> float:
    return round(sum(line.price * line.quantity for line in lines), 2)


@storefront.entity(part_of="Order")
class OrderLine:
    """A product as it was when the order was placed."""

    product_id = String(required=True, max_length=50)
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = Text()

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)


@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=50, unique=True)
    user_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    address_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    total_amount = Float(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.CONFIRMED.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_matches_lines(self):
        if not self.lines:
            return
        expected = lines_total(self.lines)
        if abs((self.total_amount or 0.0) - expected) > _TOTAL_TOLERANCE:
            raise ValidationError(
                {"total_amount": [f"Total {self.total_amount} does not match the sum of order lines {expected}"]}
            )

    @classmethod
    def place(cls, user_id, lines, address_id, payment_id, total_amount=None, order_number=None):
        """Create a confirmed order from line dicts.

        ``total_amount`` defaults to the line total; when given it must match it.
        """
        if not lines:
            raise ValidationError({"products": ["An order needs at least one product"]})

        order_lines = [
            OrderLine(
                product_id=str(line["product_id"]),
                name=line["name"],
                price=line["price"],
                quantity=line.get("quantity", 1),
                image=line.get("image"),
            )
            for line in lines
        ]
        expected = lines_total(order_lines)
        if total_amount is None:
            total_amount = expected
        elif abs(total_amount - expected) > _TOTAL_TOLERANCE:
            raise ValidationError(
                {"total_amount": [f"Total {total_amount} does not match the sum of order lines {expected}"]}
            )

        now = datetime.now(UTC)
        order = cls(
            order_number=order_number or new_order_number(),
            user_id=user_id,
            lines=order_lines,
            address_id=address_id,
            payment_id=payment_id,
            total_amount=round(total_amount, 2),
            status=OrderStatus.CONFIRMED.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                order_number=order.order_number,
                user_id=user_id,
                payment_id=payment_id,
                total_amount=order.total_amount,
                item_count=sum(line.quantity for line in order_lines),
                placed_at=now,
            )
        )
        return order

    def update_status(self, new_status: str, strict: bool = False) -> None:
        try:
            target = OrderStatus(new_status)
        except ValueError:
            valid = ", ".join(s.value for s in OrderStatus)
            raise ValidationError({"status": [f"Unknown status {new_status!r}; expected one of {valid}"]}) from None

        current = OrderStatus(self.status)
        if strict and target not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    def as_dict(self) -> dict:
        return {
            "id": str(self.id),
            "order_number": self.order_number,
            "user_id": str(self.user_id),
            "products": [
                {
                    "product_id": line.product_id,
                    "name": line.name,
                    "price": line.price,
                    "quantity": line.quantity,
                    "image": line.image,
                }
                for line in self.lines
            ],
            "address_id": str(self.address_id),
            "payment_id": str(self.payment_id),
            "total_amount": self.total_amount,
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
