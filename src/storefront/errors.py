"""Storefront error taxonomy.

Field-level input problems are raised as Protean's ``ValidationError`` and
missing records as ``ObjectNotFoundError``; both map to HTTP through
``protean.integrations.fastapi``. Everything else the storefront can fail with
derives from :class:`StorefrontError`, which carries a stable ``code`` and the
HTTP status it maps to. The client package raises the same classes when it
decodes an error response.
"""

from protean.exceptions import ValidationError


class StorefrontError(Exception):
    code = "internal_error"
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(StorefrontError):
    """Field-level validation failure as seen by a client.

    ``errors`` maps field names to lists of messages.
    """

    code = "validation_error"
    status_code = 400
    default_message = "Invalid input"

    def __init__(self, errors=None, message=None):
        self.errors = errors or {}
        super().__init__(message)


class DuplicateEmail(StorefrontError):
    code = "duplicate_email"
    status_code = 409
    default_message = "User with this email already exists"


class InvalidCredentials(StorefrontError):
    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid email or password"


class InvalidToken(StorefrontError):
    code = "invalid_token"
    status_code = 401
    default_message = "Invalid token"


class TokenExpired(InvalidToken):
    code = "token_expired"
    default_message = "Token expired"


class Forbidden(StorefrontError):
    code = "forbidden"
    status_code = 403
    default_message = "Admin access required"


class NotFound(StorefrontError):
    code = "not_found"
    status_code = 404
    default_message = "Not found"


class PaymentVerificationFailed(StorefrontError):
    code = "payment_verification_failed"
    status_code = 400
    default_message = "Payment verification failed"


class RateLimited(StorefrontError):
    code = "rate_limited"
    status_code = 429
    default_message = "Too many requests. Please try again later."


class UpstreamGatewayError(StorefrontError):
    code = "upstream_gateway_error"
    status_code = 502
    default_message = "Payment gateway request failed"


class InternalError(StorefrontError):
    pass


class InvalidProduct(ValidationError):
    """A product failed catalog validation (name, price, image, description or category)."""

    code = "invalid_product"


# Keyed by ``code`` so a client can rebuild the exception from an error body.
ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        InvalidInput,
        DuplicateEmail,
        InvalidCredentials,
        InvalidToken,
        TokenExpired,
        Forbidden,
        NotFound,
        PaymentVerificationFailed,
        RateLimited,
        UpstreamGatewayError,
        InternalError,
    )
}
