"""Storefront FastAPI application.

Commands are processed synchronously inside the request. Every request runs
inside the storefront domain context.

Usage:
    uvicorn storefront.app:create_app --factory --host 0.0.0.0 --port 8000 --reload
"""

from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from storefront.api import (
    address_router,
    auth_router,
    checkout_router,
    order_router,
    payment_router,
    product_router,
    user_router,
)
from storefront.api.errors import register_error_handlers
from storefront.api.schemas import HealthResponse
from storefront.auth.rate_limit import SlidingWindowRateLimiter
from storefront.auth.service import AuthService
from storefront.config import Settings
from storefront.domain import logger, storefront
from storefront.gateway import PaymentGateway, build_gateway
from storefront.utils.logging import add_context, clear_context

VERSION = "1.0.0"


def create_app(
    settings: Settings | None = None,
    gateway: PaymentGateway | None = None,
    rate_limiter: SlidingWindowRateLimiter | None = None,
    init_domain: bool = True,
) -> FastAPI:
    """Build the application.

    Collaborators that tests want to control (the gateway, the rate limiter)
    can be passed in; otherwise they are built from ``settings``. Pass
    ``init_domain=False`` when the caller has already initialized the domain.
    """
    settings = settings or Settings.from_env()
    if init_domain:
        storefront.init()

    app = FastAPI(
        title="Storefront API",
        description="Catalog, accounts, checkout and order management",
        version=VERSION,
    )

    app.state.settings = settings
    app.state.auth = AuthService(settings)
    app.state.gateway = gateway or build_gateway(settings)
    if rate_limiter is None and settings.rate_limit_enabled:
        rate_limiter = SlidingWindowRateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )
    app.state.rate_limiter = rate_limiter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        clear_context()
        add_context(method=request.method, path=request.url.path)
        with storefront.domain_context():
            response = await call_next(request)
        return response

    app.include_router(user_router)
    app.include_router(auth_router)
    app.include_router(product_router)
    app.include_router(address_router)
    app.include_router(payment_router)
    app.include_router(order_router)
    app.include_router(checkout_router)

    register_error_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(timestamp=datetime.now(UTC), version=VERSION)

    logger.info(
        "app_created",
        environment=settings.environment,
        gateway=app.state.gateway.name,
        rate_limit=rate_limiter is not None,
    )
    return app
