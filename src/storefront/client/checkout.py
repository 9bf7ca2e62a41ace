"""Client checkout flow.

State Machine:
    CART_REVIEW → ADDRESS_ENTRY → PAYMENT_SELECTION → PAYMENT_CONFIRMATION → ORDER_CREATED

Address and payment details are validated locally; a step that fails
validation returns its per-field errors and leaves the state where it was.
Only ``open_gateway_order`` and ``confirm`` talk to the backend. An API
failure during ``confirm`` is recorded on ``last_error``, re-raised, and
leaves the flow in PAYMENT_CONFIRMATION so the shopper can retry.
"""

from datetime import date
from enum import Enum

from protean.exceptions import ValidationError

from storefront.address.validation import normalize_phone, validate_address
from storefront.client.api import StorefrontClient
from storefront.client.cart import Cart
from storefront.domain import logger
from storefront.errors import StorefrontError
from storefront.payment.methods import (
    UnknownPaymentMethod,
    card_last4,
    mint_transaction_id,
    requires_gateway,
    resolve_method,
    validate_payment_details,
)

ADDRESS_FIELDS = ("full_name", "phone", "email", "address", "landmark", "city", "state", "pincode")


class CheckoutState(Enum):
    CART_REVIEW = "cart_review"
    ADDRESS_ENTRY = "address_entry"
    PAYMENT_SELECTION = "payment_selection"
    PAYMENT_CONFIRMATION = "payment_confirmation"
    ORDER_CREATED = "order_created"


_BACK = {
    CheckoutState.ADDRESS_ENTRY: CheckoutState.CART_REVIEW,
    CheckoutState.PAYMENT_SELECTION: CheckoutState.ADDRESS_ENTRY,
}


class InvalidCheckoutStep(RuntimeError):
    """An action was attempted from a state that does not allow it."""


class CheckoutFlow:
    def __init__(self, client: StorefrontClient, cart: Cart, atomic: bool = True, today: date | None = None) -> None:
        self.client = client
        self.cart = cart
        self.atomic = atomic
        self._today = today
        self._reset()

    def _reset(self) -> None:
        self.state = CheckoutState.CART_REVIEW
        self.address: dict | None = None
        self.payment_method: str | None = None
        self.upi_id: str | None = None
        self.card_last4: str | None = None
        self.gateway_order: dict | None = None
        self.order: dict | None = None
        self.last_error: Exception | None = None

    def _require(self, *states: CheckoutState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.name for s in states)
            raise InvalidCheckoutStep(f"Cannot do that from {self.state.name}; expected {allowed}")

    # -------------------------------------------------------------------
    # Forward transitions
    # -------------------------------------------------------------------
    def proceed_to_checkout(self) -> dict[str, list[str]]:
        self._require(CheckoutState.CART_REVIEW)
        if self.cart.is_empty:
            return {"cart": ["Your cart is empty"]}
        self.state = CheckoutState.ADDRESS_ENTRY
        return {}

    def submit_address(self, fields: dict) -> dict[str, list[str]]:
        self._require(CheckoutState.ADDRESS_ENTRY)
        errors = validate_address(fields)
        if errors:
            return errors

        address = {name: (str(fields.get(name)).strip() if fields.get(name) else None) for name in ADDRESS_FIELDS}
        address["phone"] = normalize_phone(fields.get("phone"))
        self.address = address
        self.state = CheckoutState.PAYMENT_SELECTION
        return {}

    def select_payment(self, method: str, details: dict | None = None) -> dict[str, list[str]]:
        self._require(CheckoutState.PAYMENT_SELECTION)
        try:
            resolved = resolve_method(method)
        except UnknownPaymentMethod as exc:
            return {"payment_method": [str(exc)]}

        details = details or {}
        errors = validate_payment_details(resolved, details, today=self._today)
        if errors:
            return errors

        self.payment_method = resolved.value
        self.card_last4 = card_last4(details.get("card_number"))
        self.upi_id = (details.get("upi_id") or "").strip() or None
        self.gateway_order = None
        self.state = CheckoutState.PAYMENT_CONFIRMATION
        return {}

    @property
    def needs_gateway(self) -> bool:
        return self.payment_method is not None and requires_gateway(self.payment_method)

    def open_gateway_order(self, receipt: str | None = None) -> dict:
        """Open a gateway order for the cart total; the shopper then pays in the gateway UI."""
        self._require(CheckoutState.PAYMENT_CONFIRMATION)
        if not self.needs_gateway:
            raise InvalidCheckoutStep(f"{self.payment_method} is not paid through the gateway")

        self.gateway_order = self.client.create_gateway_order(
            amount=self.cart.total,
            receipt=receipt or mint_transaction_id(self.payment_method),
            payment_method=self.payment_method,
            email=self.address.get("email"),
            phone=self.address.get("phone"),
        )
        return self.gateway_order

    def confirm(self, gateway_payment_id: str | None = None, signature: str | None = None) -> dict:
        """Record the payment and the order, then empty the cart."""
        self._require(CheckoutState.PAYMENT_CONFIRMATION)
        self.last_error = None

        proof = None
        if gateway_payment_id or signature:
            if self.gateway_order is None:
                raise InvalidCheckoutStep("Open a gateway order before confirming a gateway payment")
            proof = {
                "gateway_order_id": self.gateway_order["order"]["id"],
                "gateway_payment_id": gateway_payment_id,
                "signature": signature,
            }

        transaction_id = gateway_payment_id or mint_transaction_id(self.payment_method)
        lines = self.cart.lines()
        total = self.cart.total
        try:
            if self.atomic:
                order = self._confirm_in_one_call(lines, total, transaction_id, proof)
            else:
                order = self._confirm_step_by_step(lines, total, transaction_id, proof)
        except (StorefrontError, ValidationError) as exc:
            self.last_error = exc
            logger.warning("checkout_failed", error=str(exc), method=self.payment_method)
            raise

        self.order = order
        self.cart.clear()
        self.state = CheckoutState.ORDER_CREATED
        return order

    def _confirm_in_one_call(self, lines, total, transaction_id, proof) -> dict:
        return self.client.checkout(
            address=self.address,
            payment_method=self.payment_method,
            products=lines,
            total_amount=total,
            transaction_id=transaction_id,
            upi_id=self.upi_id,
            card_last4=self.card_last4,
            gateway=proof,
        )

    def _confirm_step_by_step(self, lines, total, transaction_id, proof) -> dict:
        user_id = self.client.verify()["id"]
        address = self.client.record_address(user_id, **self.address)
        if proof is not None:
            payment = self.client.verify_payment(
                proof["gateway_order_id"],
                proof["gateway_payment_id"],
                proof["signature"],
                payment_method=self.payment_method,
                amount=total,
            )
        else:
            payment = self.client.record_payment(
                self.payment_method,
                total,
                user_id=user_id,
                transaction_id=transaction_id,
                upi_id=self.upi_id,
                card_last4=self.card_last4,
            )
        order = self.client.place_order(
            user_id=user_id,
            products=lines,
            address_id=address["id"],
            payment_id=payment["id"],
            total_amount=total,
        )
        return {
            "order_number": order["order_number"],
            "order_id": order["id"],
            "address_id": address["id"],
            "payment_id": payment["id"],
            "transaction_id": payment["transaction_id"],
            "payment_status": payment["status"],
            "order_status": order["status"],
            "total_amount": order["total_amount"],
        }

    # -------------------------------------------------------------------
    # Other transitions
    # -------------------------------------------------------------------
    def back(self) -> CheckoutState:
        previous = _BACK.get(self.state)
        if previous is None:
            raise InvalidCheckoutStep(f"Cannot go back from {self.state.name}")
        self.state = previous
        return self.state

    def start_new(self) -> None:
        self._require(CheckoutState.ORDER_CREATED)
        self._reset()
