"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state with no cross-user sharing.
State tracks ids and tokens returned by earlier steps so follow-up requests
can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks state for a single simulated shopper."""

    user_id: str | None = None
    email: str | None = None
    token: str | None = None
    products: list[dict] = field(default_factory=list)
    cart: list[dict] = field(default_factory=list)
    gateway_order_id: str | None = None
    order_number: str | None = None

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


@dataclass
class AdminState:
    """Tracks state for a simulated admin session."""

    token: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_numbers: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
