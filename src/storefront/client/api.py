"""HTTP client for the storefront API.

Works over a ``requests.Session`` against a running server, or over a
FastAPI ``TestClient`` (pass ``base_url=""``). Error bodies are turned back
into the storefront exception they were raised from.
"""

from __future__ import annotations

import requests

from storefront.client.catalog import CatalogCache
from storefront.client.storage import TOKEN_KEY, LocalStorage
from storefront.domain import logger
from storefront.errors import (
    ERRORS_BY_CODE,
    InternalError,
    InvalidInput,
    InvalidProduct,
    StorefrontError,
)

DEFAULT_BASE_URL = "http://localhost:8000"


def raise_for_error(response) -> None:
    """Raise the storefront exception described by an error response."""
    if response.status_code < 400:
        return

    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    code = body.get("code")
    error = body.get("error")

    if code == InvalidProduct.code:
        raise InvalidProduct(error if isinstance(error, dict) else {"product": [str(error)]})
    if code == InvalidInput.code:
        if isinstance(error, dict):
            raise InvalidInput(errors=error)
        raise InvalidInput(message=error)

    exc_class = ERRORS_BY_CODE.get(code)
    if exc_class is None:
        exc_class = InternalError if response.status_code >= 500 else StorefrontError
        error = error or getattr(response, "text", "") or f"HTTP {response.status_code}"
    raise exc_class(error if isinstance(error, str) else str(error))


class StorefrontClient:
    def __init__(
        self,
        session=None,
        base_url: str = DEFAULT_BASE_URL,
        storage: LocalStorage | None = None,
        catalog_ttl_seconds: float = 300,
        timeout: float = 10,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.base_url = base_url.rstrip("/")
        self.storage = storage or LocalStorage()
        self.catalog = CatalogCache(self.storage, ttl_seconds=catalog_ttl_seconds)
        self.timeout = timeout
        self.user: dict | None = None

    # -------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------
    @property
    def token(self) -> str | None:
        return self.storage.get(TOKEN_KEY)

    def _headers(self) -> dict:
        token = self.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _request(self, method: str, path: str, json=None, params=None):
        kwargs = {"headers": self._headers()}
        if json is not None:
            kwargs["json"] = json
        if params:
            kwargs["params"] = params
        if isinstance(self.session, requests.Session):
            kwargs["timeout"] = self.timeout

        try:
            response = self.session.request(method, f"{self.base_url}{path}", **kwargs)
        except requests.RequestException as exc:
            logger.error("storefront_request_failed", method=method, path=path, error=str(exc))
            raise InternalError(f"Could not reach the storefront: {exc}") from exc

        raise_for_error(response)
        return response.json()

    # -------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------
    def _start_session(self, payload: dict) -> dict:
        self.storage.set(TOKEN_KEY, payload["token"])
        self.user = payload["user"]
        return payload["user"]

    def register(self, full_name: str, email: str, password: str) -> dict:
        payload = self._request(
            "POST", "/users/register", json={"full_name": full_name, "email": email, "password": password}
        )
        return self._start_session(payload)

    def login(self, email: str, password: str) -> dict:
        payload = self._request("POST", "/users/login", json={"email": email, "password": password})
        return self._start_session(payload)

    def logout(self) -> None:
        self.storage.delete(TOKEN_KEY)
        self.user = None

    def verify(self) -> dict:
        return self._request("POST", "/auth/verify")["claims"]

    def list_users(self) -> list[dict]:
        return self._request("GET", "/users")["users"]

    def user_detail(self, user_id: str) -> dict:
        return self._request("GET", f"/users/{user_id}")

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"/users/{user_id}")

    # -------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------
    def list_products(self, category: str | None = None, refresh: bool = False) -> list[dict]:
        if not refresh:
            cached = self.catalog.get(category)
            if cached is not None:
                return cached
        params = {"category": category} if category else None
        products = self._request("GET", "/products", params=params)["products"]
        self.catalog.put(products, category)
        return products

    def get_product(self, product_id: str) -> dict:
        return self._request("GET", f"/products/{product_id}")

    def add_product(self, **fields) -> dict:
        product = self._request("POST", "/products", json=fields)
        self.catalog.invalidate()
        return product

    def delete_product(self, product_id: str) -> None:
        self._request("DELETE", f"/products/{product_id}")
        self.catalog.invalidate()

    # -------------------------------------------------------------------
    # Addresses and payments
    # -------------------------------------------------------------------
    def record_address(self, user_id: str, **fields) -> dict:
        return self._request("POST", "/addresses", json={"user_id": user_id, **fields})

    def list_addresses(self, user_id: str) -> list[dict]:
        return self._request("GET", f"/addresses/{user_id}")["addresses"]

    def payment_methods(self) -> list[dict]:
        return self._request("GET", "/payments/methods")["methods"]

    def record_payment(self, payment_method: str, amount: float, **fields) -> dict:
        return self._request("POST", "/payments", json={"payment_method": payment_method, "amount": amount, **fields})

    def list_payments(self, user_id: str) -> list[dict]:
        return self._request("GET", f"/payments/{user_id}")["payments"]

    def create_gateway_order(self, amount: float, receipt: str, payment_method: str = "upi", **fields) -> dict:
        return self._request(
            "POST",
            "/payments/create-order",
            json={"amount": amount, "receipt": receipt, "payment_method": payment_method, **fields},
        )

    def verify_payment(self, gateway_order_id: str, gateway_payment_id: str, signature: str, **fields) -> dict:
        return self._request(
            "POST",
            "/payments/verify",
            json={
                "gateway_order_id": gateway_order_id,
                "gateway_payment_id": gateway_payment_id,
                "signature": signature,
                **fields,
            },
        )

    def refund_payment(self, payment_id: str, amount: float | None = None) -> dict:
        return self._request("POST", f"/payments/{payment_id}/refund", json={"amount": amount})

    def fetch_gateway_payment(self, gateway_payment_id: str) -> dict:
        return self._request("GET", f"/payments/gateway/{gateway_payment_id}")

    def configure_gateway(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> dict:
        return self._request(
            "POST",
            "/payments/gateway/configure",
            json={"should_succeed": should_succeed, "failure_reason": failure_reason},
        )

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def place_order(self, user_id: str, products: list[dict], address_id: str, payment_id: str, **fields) -> dict:
        return self._request(
            "POST",
            "/orders",
            json={
                "user_id": user_id,
                "products": products,
                "address_id": address_id,
                "payment_id": payment_id,
                **fields,
            },
        )

    def list_orders(self) -> list[dict]:
        return self._request("GET", "/orders")["orders"]

    def orders_for_user(self, user_id: str) -> list[dict]:
        return self._request("GET", f"/orders/{user_id}")["orders"]

    def update_order_status(self, order_number: str, status: str) -> dict:
        return self._request("PUT", f"/orders/{order_number}", json={"status": status})

    def checkout(self, address: dict, payment_method: str, products: list[dict], **fields) -> dict:
        return self._request(
            "POST",
            "/checkout",
            json={"address": address, "payment_method": payment_method, "products": products, **fields},
        )

    def health(self) -> dict:
        return self._request("GET", "/health")
