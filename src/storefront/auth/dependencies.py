"""FastAPI dependencies for authentication, admin gating and rate limiting."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.errors import Forbidden, InvalidToken
from storefront.user.user import UserRole

bearer_scheme = HTTPBearer(auto_error=False)


async def current_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Decode the bearer token and attach its claims to ``request.state``."""
    if credentials is None:
        raise InvalidToken("Access token required")

    claims = request.app.state.auth.verify(credentials.credentials)
    request.state.claims = claims
    return claims


async def require_admin(claims: dict = Depends(current_claims)) -> dict:
    if claims.get("role") != UserRole.ADMIN.value:
        raise Forbidden()
    return claims


def ensure_self_or_admin(claims: dict, user_id: str) -> None:
    """Allow a user to read their own records; admins may read anyone's."""
    if claims.get("id") != user_id and claims.get("role") != UserRole.ADMIN.value:
        raise Forbidden("You can only access your own records")


async def rate_limited(request: Request) -> None:
    limiter = request.app.state.rate_limiter
    if limiter is None:
        return
    client = request.client.host if request.client else "unknown"
    limiter.check(client)
