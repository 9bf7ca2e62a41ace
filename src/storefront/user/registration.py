"""User registration: command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.errors import DuplicateEmail
from storefront.user.user import User, UserRole


@storefront.command(part_of="User")
class RegisterUser:
    """Create an account from an already-hashed password."""

    full_name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)
    role = String(max_length=20, default=UserRole.CUSTOMER.value)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            logger.info("registration_rejected", reason="duplicate_email")
            raise DuplicateEmail()

        user = User.register(
            full_name=command.full_name,
            email=command.email,
            password_hash=command.password_hash,
            role=command.role or UserRole.CUSTOMER.value,
        )
        repo.add(user)
        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)
