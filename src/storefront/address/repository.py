from storefront.address.address import Address
from storefront.domain import storefront


@storefront.repository(part_of=Address)
class AddressRepository:
    def for_user(self, user_id: str) -> list[Address]:
        addresses = self._dao.query.filter(user_id=str(user_id)).all().items
        return sorted(addresses, key=lambda a: a.created_at)
