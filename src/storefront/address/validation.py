"""Delivery address rules, shared by the Address aggregate and the checkout client.

The checkout flow validates addresses locally before any network call, so the
rules are plain functions over a mapping rather than aggregate invariants only.
"""

import re

from storefront.shared.email import is_valid_email

PHONE_DIGITS = 10
_PINCODE = re.compile(r"[0-9]{6}")
_NON_DIGITS = re.compile(r"[^0-9]")

REQUIRED_FIELDS = {
    "full_name": "Full name is required",
    "address": "Address is required",
    "city": "City is required",
    "state": "State is required",
}


def normalize_phone(phone: str | None) -> str:
    """Strip spaces, dashes and any other non-digit characters."""
    return _NON_DIGITS.sub("", phone or "")


def validate_address(data) -> dict[str, list[str]]:
    """Return per-field error messages for ``data``; empty when the address is valid."""
    errors: dict[str, list[str]] = {}

    for field, message in REQUIRED_FIELDS.items():
        if not str(data.get(field) or "").strip():
            errors[field] = [message]

    phone = normalize_phone(data.get("phone"))
    if not str(data.get("phone") or "").strip():
        errors["phone"] = ["Phone number is required"]
    elif len(phone) != PHONE_DIGITS:
        errors["phone"] = [f"Phone number must be {PHONE_DIGITS} digits"]

    email = str(data.get("email") or "").strip()
    if not email:
        errors["email"] = ["Email is required"]
    elif not is_valid_email(email):
        errors["email"] = ["Invalid email format"]

    pincode = str(data.get("pincode") or "").strip()
    if not pincode:
        errors["pincode"] = ["Pincode is required"]
    elif not _PINCODE.fullmatch(pincode):
        errors["pincode"] = ["Pincode must be 6 digits"]

    return errors
