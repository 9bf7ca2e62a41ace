"""Tests for environment-driven application settings."""

from storefront.config import DEFAULT_JWT_SECRET, Settings


class TestSettingsFromEnv:
    def test_defaults(self, monkeypatch):
        for name in ("JWT_SECRET", "STOREFRONT_ADMIN_EMAILS", "RATE_LIMIT_ENABLED", "FRONTEND_URL", "PAYMENT_GATEWAY"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.jwt_secret == DEFAULT_JWT_SECRET
        assert settings.jwt_expiration_days == 7
        assert settings.rate_limit_enabled is True
        assert settings.cors_origins == ("*",)
        assert settings.payment_gateway == "fake"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "prod-secret")
        monkeypatch.setenv("STOREFRONT_ADMIN_EMAILS", "Boss@Example.com, ops@example.com")
        monkeypatch.setenv("STOREFRONT_STRICT_ORDER_STATUS", "true")
        monkeypatch.setenv("RATE_LIMIT_ENABLED", "0")
        monkeypatch.setenv("FRONTEND_URL", "https://shop.example.com")
        monkeypatch.setenv("PAYMENT_GATEWAY", "Razorpay")
        settings = Settings.from_env()
        assert settings.jwt_secret == "prod-secret"
        assert settings.admin_emails == frozenset({"boss@example.com", "ops@example.com"})
        assert settings.strict_order_status is True
        assert settings.rate_limit_enabled is False
        assert settings.cors_origins == ("https://shop.example.com",)
        assert settings.payment_gateway == "razorpay"

    def test_is_admin_email(self):
        settings = Settings(admin_emails=frozenset({"boss@example.com"}))
        assert settings.is_admin_email("BOSS@example.com")
        assert not settings.is_admin_email("asha@example.com")

    def test_is_production(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        assert Settings.from_env().is_production
