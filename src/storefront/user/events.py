"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new account was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    full_name = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class UserLoggedIn:
    __version__ = 1

    user_id = Identifier(required=True)
    logged_in_at = DateTime(required=True)


@storefront.event(part_of="User")
class AdminGranted:
    """An existing account was promoted to the admin role."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    granted_at = DateTime(required=True)
