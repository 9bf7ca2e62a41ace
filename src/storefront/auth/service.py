"""Registration, login and token verification.

``AuthService`` owns the password hasher and the token service so neither
needs to live at module level. Account writes go through the domain's
``RegisterUser`` and ``RecordLogin`` commands.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.auth.passwords import MAX_PASSWORD_BYTES, PasswordHasher
from storefront.auth.tokens import TokenService
from storefront.config import Settings
from storefront.domain import logger
from storefront.errors import InvalidCredentials
from storefront.user.authentication import RecordLogin
from storefront.user.registration import RegisterUser
from storefront.user.user import User, UserRole

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class Session:
    token: str
    user: User


class AuthService:
    def __init__(self, settings: Settings, hasher: PasswordHasher | None = None, tokens: TokenService | None = None):
        self.settings = settings
        self.hasher = hasher or PasswordHasher(rounds=settings.bcrypt_rounds)
        self.tokens = tokens or TokenService(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiration_days=settings.jwt_expiration_days,
        )

    def register(self, full_name: str, email: str, password: str) -> Session:
        """Create an account and return a session for it.

        Raises ``DuplicateEmail`` when the address is taken and
        ``ValidationError`` for a short name, malformed email or weak password.
        """
        self._check_password(password)

        role = UserRole.ADMIN.value if self.settings.is_admin_email(email or "") else UserRole.CUSTOMER.value
        user_id = current_domain.process(
            RegisterUser(
                full_name=full_name,
                email=email,
                password_hash=self.hasher.hash(password),
                role=role,
            ),
            asynchronous=False,
        )
        user = current_domain.repository_for(User).get(user_id)
        return Session(token=self.tokens.issue(user), user=user)

    def login(self, email: str, password: str) -> Session:
        user = current_domain.repository_for(User).find_by_email(email or "")
        if user is None or not self.hasher.verify(password or "", user.password_hash):
            logger.info("login_failed")
            raise InvalidCredentials()

        current_domain.process(RecordLogin(user_id=user.id), asynchronous=False)
        user = current_domain.repository_for(User).get(user.id)
        logger.info("login_succeeded", user_id=str(user.id))
        return Session(token=self.tokens.issue(user), user=user)

    def verify(self, token: str) -> dict:
        return self.tokens.decode(token)

    @staticmethod
    def _check_password(password: str | None) -> None:
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError({"password": [f"Password must be at most {MAX_PASSWORD_BYTES} bytes"]})
