"""Repository for the User aggregate."""

from storefront.domain import storefront
from storefront.shared.email import normalize_email
from storefront.user.user import User


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=normalize_email(email)).all().first

    def list_all(self) -> list[User]:
        users = self._dao.query.all().items
        return sorted(users, key=lambda u: u.created_at)
