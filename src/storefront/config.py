"""Application settings.

Domain wiring (databases, brokers, event store) lives in ``domain.toml`` and is
selected by ``PROTEAN_ENV``. Everything the HTTP layer needs on top of that is
read from environment variables into an immutable :class:`Settings`, which
``create_app`` hands to the objects it builds.
"""

import os
from dataclasses import dataclass, field

from storefront.utils.logging import current_env

DEFAULT_JWT_SECRET = "storefront-dev-secret"
DEFAULT_GATEWAY_SECRET = "storefront-gateway-secret"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    environment: str = "development"

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiration_days: int = 7
    bcrypt_rounds: int = 12

    admin_emails: frozenset[str] = field(default_factory=frozenset)
    strict_order_status: bool = False

    rate_limit_enabled: bool = True
    rate_limit_window_seconds: float = 15 * 60
    rate_limit_max_requests: int = 100

    cors_origins: tuple[str, ...] = ("*",)

    payment_gateway: str = "fake"
    gateway_key_id: str = ""
    gateway_key_secret: str = DEFAULT_GATEWAY_SECRET
    gateway_currency: str = "INR"
    gateway_timeout_seconds: float = 10.0

    @classmethod
    def from_env(cls) -> "Settings":
        origins = _env_list("FRONTEND_URL") or ("*",)
        return cls(
            environment=current_env(),
            jwt_secret=os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expiration_days=int(os.getenv("JWT_EXPIRATION_DAYS", "7")),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
            admin_emails=frozenset(email.lower() for email in _env_list("STOREFRONT_ADMIN_EMAILS")),
            strict_order_status=_env_bool("STOREFRONT_STRICT_ORDER_STATUS", False),
            rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", True),
            rate_limit_window_seconds=float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(15 * 60))),
            rate_limit_max_requests=int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "100")),
            cors_origins=origins,
            payment_gateway=os.getenv("PAYMENT_GATEWAY", "fake").lower(),
            gateway_key_id=os.getenv("RAZORPAY_KEY_ID", ""),
            gateway_key_secret=os.getenv("RAZORPAY_KEY_SECRET", DEFAULT_GATEWAY_SECRET),
            gateway_currency=os.getenv("GATEWAY_CURRENCY", "INR"),
            gateway_timeout_seconds=float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "10")),
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def is_admin_email(self, email: str) -> bool:
        return email.lower() in self.admin_emails
