"""Storefront domain composition root.

Users, products, addresses, payments and orders are registered against a
single domain so that checkout can persist an Address, a Payment and an Order
inside one unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
