"""User aggregate: a shopper or admin account.

Passwords never reach the aggregate in clear text; registration receives a
bcrypt hash produced by :mod:`storefront.auth.passwords`.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.shared.email import is_valid_email, normalize_email
from storefront.user.events import AdminGranted, UserLoggedIn, UserRegistered


class UserRole(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@storefront.aggregate
class User:
    full_name = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    role = String(choices=UserRole, default=UserRole.CUSTOMER.value)
    created_at = DateTime()
    last_login_at = DateTime()

    @invariant.post
    def full_name_has_at_least_two_characters(self):
        if len((self.full_name or "").strip()) < 2:
            raise ValidationError({"full_name": ["Full name must be at least 2 characters"]})

    @invariant.post
    def email_is_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": ["Invalid email format"]})

    @classmethod
    def register(cls, full_name, email, password_hash, role=UserRole.CUSTOMER.value):
        now = datetime.now(UTC)
        user = cls(
            full_name=(full_name or "").strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            role=role,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                full_name=user.full_name,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def record_login(self) -> None:
        now = datetime.now(UTC)
        self.last_login_at = now
        self.raise_(UserLoggedIn(user_id=self.id, logged_in_at=now))

    def grant_admin(self) -> None:
        if self.is_admin:
            return
        self.role = UserRole.ADMIN.value
        self.raise_(AdminGranted(user_id=self.id, email=self.email, granted_at=datetime.now(UTC)))

    def as_dict(self) -> dict:
        return {
            "id": str(self.id),
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role,
            "created_at": self.created_at,
        }
