"""Storefront HTTP API package."""

from storefront.api.addresses import router as address_router
from storefront.api.checkout import router as checkout_router
from storefront.api.orders import router as order_router
from storefront.api.payments import router as payment_router
from storefront.api.products import router as product_router
from storefront.api.users import auth_router
from storefront.api.users import router as user_router

__all__ = [
    "address_router",
    "auth_router",
    "checkout_router",
    "order_router",
    "payment_router",
    "product_router",
    "user_router",
]
