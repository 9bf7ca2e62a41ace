"""Address aggregate: a delivery address captured at checkout.

Addresses are append-only. They are never updated or deleted once recorded.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String

from storefront.address.events import AddressRecorded
from storefront.address.validation import normalize_phone, validate_address
from storefront.domain import storefront


@storefront.aggregate
class Address:
    user_id = Identifier(required=True)
    full_name = String(required=True, max_length=100)
    phone = String(required=True, max_length=10)
    email = String(required=True, max_length=254)
    address = String(required=True, max_length=500)
    landmark = String(max_length=200)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    pincode = String(required=True, max_length=6)
    created_at = DateTime()

    @invariant.post
    def address_fields_are_valid(self):
        errors = validate_address(
            {
                "full_name": self.full_name,
                "phone": self.phone,
                "email": self.email,
                "address": self.address,
                "city": self.city,
                "state": self.state,
                "pincode": self.pincode,
            }
        )
        if errors:
            raise ValidationError(errors)

    @classmethod
    def record(cls, user_id, full_name, phone, email, address, city, state, pincode, landmark=None):
        errors = validate_address(
            {
                "full_name": full_name,
                "phone": phone,
                "email": email,
                "address": address,
                "city": city,
                "state": state,
                "pincode": pincode,
            }
        )
        if errors:
            raise ValidationError(errors)

        now = datetime.now(UTC)
        record = cls(
            user_id=user_id,
            full_name=full_name.strip(),
            phone=normalize_phone(phone),
            email=email.strip(),
            address=address.strip(),
            landmark=(landmark or "").strip() or None,
            city=city.strip(),
            state=state.strip(),
            pincode=str(pincode).strip(),
            created_at=now,
        )
        record.raise_(AddressRecorded(address_id=record.id, user_id=user_id, city=record.city, recorded_at=now))
        return record

    def as_dict(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "full_name": self.full_name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "landmark": self.landmark,
            "city": self.city,
            "state": self.state,
            "pincode": self.pincode,
            "created_at": self.created_at,
        }
