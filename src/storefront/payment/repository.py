from storefront.domain import storefront
from storefront.payment.payment import Payment


@storefront.repository(part_of=Payment)
class PaymentRepository:
    def for_user(self, user_id: str) -> list[Payment]:
        payments = self._dao.query.filter(user_id=str(user_id)).all().items
        return sorted(payments, key=lambda p: p.created_at)

    def list_all(self) -> list[Payment]:
        return sorted(self._dao.query.all().items, key=lambda p: p.created_at)

    def find_by_transaction_id(self, transaction_id: str) -> Payment | None:
        return self._dao.query.filter(transaction_id=transaction_id).all().first

    def find_by_gateway_order_id(self, gateway_order_id: str) -> Payment | None:
        return self._dao.query.filter(gateway_order_id=gateway_order_id).all().first

    def find_by_gateway_payment_id(self, gateway_payment_id: str) -> Payment | None:
        return self._dao.query.filter(gateway_payment_id=gateway_payment_id).all().first
