"""Admin actions on accounts: promotion and deletion.

Deleting a user removes the account row only. Addresses, payments and orders
that reference it are left in place.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.user.user import User


@storefront.command(part_of="User")
class GrantAdmin:
    email = String(required=True, max_length=254)


@storefront.command(part_of="User")
class DeleteUser:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class UserAdministrationHandler:
    @handle(GrantAdmin)
    def grant_admin(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)
        if user is None:
            raise ObjectNotFoundError(f"User with email {command.email} does not exist")

        user.grant_admin()
        repo.add(user)
        logger.info("admin_granted", user_id=str(user.id))
        return str(user.id)

    @handle(DeleteUser)
    def delete_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        repo._dao.delete(user)
        logger.info("user_deleted", user_id=str(command.user_id))
