"""Address capture: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.address.address import Address
from storefront.domain import storefront


@storefront.command(part_of="Address")
class RecordAddress:
    user_id = Identifier(required=True)
    full_name = String(max_length=100)
    phone = String(max_length=32)
    email = String(max_length=254)
    address = String(max_length=500)
    landmark = String(max_length=200)
    city = String(max_length=100)
    state = String(max_length=100)
    pincode = String(max_length=12)


def address_from_command(command) -> Address:
    return Address.record(
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


@storefront.command_handler(part_of=Address)
class RecordAddressHandler:
    @handle(RecordAddress)
    def record_address(self, command):
        address = address_from_command(command)
        current_domain.repository_for(Address).add(address)
        return str(address.id)
