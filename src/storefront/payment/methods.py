"""Payment methods accepted at checkout and the local checks each one needs.

Card and UPI methods carry a sub-form that is validated structurally here; no
funds are checked locally. Card, UPI, netbanking and wallet payments are
settled by the external gateway. Cash on delivery and direct transfer settle
immediately.
"""

import re
import secrets
from dataclasses import asdict, dataclass
from datetime import UTC, date, datetime
from enum import Enum


class PaymentMethodId(Enum):
    CREDIT_CARD = "credit-card"
    DEBIT_CARD = "debit-card"
    UPI = "upi"
    NETBANKING = "netbanking"
    WALLET = "wallet"
    DIRECT_TRANSFER = "direct-transfer"
    COD = "cod"


ALIASES = {
    "cash-on-delivery": PaymentMethodId.COD.value,
    "my-account": PaymentMethodId.DIRECT_TRANSFER.value,
}

CARD_METHODS = {PaymentMethodId.CREDIT_CARD, PaymentMethodId.DEBIT_CARD}
GATEWAY_METHODS = CARD_METHODS | {PaymentMethodId.UPI, PaymentMethodId.NETBANKING, PaymentMethodId.WALLET}

_CARD_NUMBER = re.compile(r"[0-9]{16}")
_CVV = re.compile(r"[0-9]{3,4}")
_UPI_HANDLE = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9]+$")

_TXN_PREFIXES = {
    PaymentMethodId.CREDIT_CARD: "TXN",
    PaymentMethodId.DEBIT_CARD: "TXN",
    PaymentMethodId.UPI: "UPI",
    PaymentMethodId.COD: "COD",
}


@dataclass(frozen=True)
class PaymentMethodInfo:
    id: str
    name: str
    description: str
    requires_gateway: bool
    form: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


METHODS = (
    PaymentMethodInfo("credit-card", "Credit Card", "Visa, Mastercard, American Express", True, "card"),
    PaymentMethodInfo("debit-card", "Debit Card", "All major debit cards", True, "card"),
    PaymentMethodInfo("upi", "UPI", "Google Pay, PhonePe, Paytm", True, "upi"),
    PaymentMethodInfo("netbanking", "Net Banking", "All major Indian banks", True),
    PaymentMethodInfo("wallet", "Digital Wallet", "Paytm, Amazon Pay", True),
    PaymentMethodInfo("direct-transfer", "Direct Transfer", "Transfer to the store account", False),
    PaymentMethodInfo("cod", "Cash on Delivery", "Pay when you receive", False),
)


class UnknownPaymentMethod(ValueError):
    pass


def resolve_method(method: str | PaymentMethodId) -> PaymentMethodId:
    """Map a method id or one of its aliases to a :class:`PaymentMethodId`."""
    if isinstance(method, PaymentMethodId):
        return method
    key = (method or "").strip().lower()
    try:
        return PaymentMethodId(ALIASES.get(key, key))
    except ValueError:
        raise UnknownPaymentMethod(f"Unknown payment method: {method!r}") from None


def requires_gateway(method) -> bool:
    return resolve_method(method) in GATEWAY_METHODS


def validate_card(number, holder_name, expiry_month, expiry_year, cvv, today: date | None = None) -> dict[str, list[str]]:
    today = today or datetime.now(UTC).date()
    errors: dict[str, list[str]] = {}

    digits = re.sub(r"\s", "", number or "")
    if not digits:
        errors["card_number"] = ["Card number is required"]
    elif not _CARD_NUMBER.fullmatch(digits):
        errors["card_number"] = ["Card number must be 16 digits"]

    if not (holder_name or "").strip():
        errors["holder_name"] = ["Cardholder name is required"]

    month = _as_int(expiry_month)
    if expiry_month in (None, ""):
        errors["expiry_month"] = ["Expiry month is required"]
    elif month is None or not 1 <= month <= 12:
        errors["expiry_month"] = ["Expiry month must be between 1 and 12"]

    year = _as_int(expiry_year)
    if expiry_year in (None, ""):
        errors["expiry_year"] = ["Expiry year is required"]
    elif year is None:
        errors["expiry_year"] = ["Expiry year must be a number"]
    else:
        if year < 100:
            year += 2000
        if year < today.year:
            errors["expiry_year"] = ["Card has expired"]
        elif year == today.year and month is not None and "expiry_month" not in errors and month < today.month:
            errors["expiry_month"] = ["Card has expired"]

    if not cvv:
        errors["cvv"] = ["CVV is required"]
    elif not _CVV.fullmatch(str(cvv)):
        errors["cvv"] = ["CVV must be 3-4 digits"]

    return errors


def validate_upi(upi_id: str | None) -> dict[str, list[str]]:
    if not (upi_id or "").strip():
        return {"upi_id": ["UPI ID is required"]}
    if not _UPI_HANDLE.match(upi_id.strip()):
        return {"upi_id": ["Invalid UPI ID format (e.g., username@bankname)"]}
    return {}


def validate_payment_details(method, details: dict | None = None, today: date | None = None) -> dict[str, list[str]]:
    """Validate the sub-form a method needs; methods without one always pass."""
    method = resolve_method(method)
    details = details or {}
    if method in CARD_METHODS:
        return validate_card(
            details.get("card_number"),
            details.get("holder_name"),
            details.get("expiry_month"),
            details.get("expiry_year"),
            details.get("cvv"),
            today=today,
        )
    if method is PaymentMethodId.UPI:
        return validate_upi(details.get("upi_id"))
    return {}


def card_last4(number: str | None) -> str | None:
    digits = re.sub(r"\D", "", number or "")
    return digits[-4:] if len(digits) >= 4 else None


def mint_transaction_id(method, now: datetime | None = None) -> str:
    """Method-prefixed, millisecond-timestamp-suffixed transaction id.

    A short random token sits between the two so ids minted in the same
    millisecond stay distinct.
    """
    method = resolve_method(method)
    now = now or datetime.now(UTC)
    millis = int(now.timestamp() * 1000)
    prefix = _TXN_PREFIXES.get(method, "TXN")
    return f"{prefix}-{secrets.token_hex(3).upper()}-{millis}"


def _as_int(value) -> int | None:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None
