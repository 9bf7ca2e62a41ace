"""Admin console reads that span more than one aggregate."""

from protean.utils.globals import current_domain

from storefront.address.address import Address
from storefront.order.order import Order
from storefront.payment.payment import Payment
from storefront.user.user import User


def user_detail(user_id: str) -> dict:
    """A user together with every address, order and payment that references them.

    Raises ``ObjectNotFoundError`` when the user does not exist.
    """
    user = current_domain.repository_for(User).get(user_id)
    return {
        "user": user.as_dict(),
        "addresses": [a.as_dict() for a in current_domain.repository_for(Address).for_user(user_id)],
        "orders": [o.as_dict() for o in current_domain.repository_for(Order).for_user(user_id)],
        "payments": [p.as_dict() for p in current_domain.repository_for(Payment).for_user(user_id)],
    }
