"""Mixed storefront workload scenario.

Combines browsing, account, checkout and admin journeys with weights that
model a small shop's traffic. This is the recommended scenario for a load
baseline. Run the server with ``RATE_LIMIT_ENABLED=0``, otherwise the
registration and login limits throttle the generator's single client address.
"""

from locust import HttpUser, between

from loadtests.scenarios.accounts import BadLoginJourney, NewShopperJourney
from loadtests.scenarios.admin import CatalogSeedingJourney
from loadtests.scenarios.catalog import BrowseCatalogJourney
from loadtests.scenarios.checkout import (
    GatewayCheckoutJourney,
    OfflineCheckoutJourney,
    TamperedSignatureJourney,
)


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Browsing (50%): most visitors only look at the catalog.
    Accounts (15%): sign-ups, plus the occasional mistyped password.
    Checkout (30%): offline and gateway payments in equal measure, a few forged proofs.
    Admin (5%): catalog seeding and order status updates.
    """

    tasks = {
        BrowseCatalogJourney: 50,
        NewShopperJourney: 12,
        BadLoginJourney: 3,
        OfflineCheckoutJourney: 14,
        GatewayCheckoutJourney: 14,
        TamperedSignatureJourney: 2,
        CatalogSeedingJourney: 5,
    }
    wait_time = between(0.5, 3.0)
