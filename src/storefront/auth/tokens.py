"""Session tokens: HS256 JWTs carrying the account's id, email, name and role."""

from datetime import UTC, datetime, timedelta

import jwt

from storefront.errors import InvalidToken, TokenExpired


class TokenService:
    def __init__(self, secret: str, algorithm: str = "HS256", expiration_days: int = 7) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.expiration = timedelta(days=expiration_days)

    def issue(self, user, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(UTC)
        payload = {
            "id": str(user.id),
            "email": user.email,
            "fullName": user.full_name,
            "role": user.role,
            "iat": issued_at,
            "exp": issued_at + self.expiration,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        """Return the claims of ``token``.

        Raises ``TokenExpired`` past the expiry and ``InvalidToken`` for any
        other signature or format problem.
        """
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidToken() from exc
