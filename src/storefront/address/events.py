from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Address")
class AddressRecorded:
    __version__ = 1

    address_id = Identifier(required=True)
    user_id = Identifier(required=True)
    city = String()
    recorded_at = DateTime(required=True)
