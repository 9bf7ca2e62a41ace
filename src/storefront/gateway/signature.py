"""Gateway callback signatures: hex HMAC-SHA256 over ``order_id|payment_id``."""

import hashlib
import hmac


def compute_signature(secret: str, gateway_order_id: str, gateway_payment_id: str) -> str:
    message = f"{gateway_order_id}|{gateway_payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def verify_signature(secret: str, gateway_order_id: str, gateway_payment_id: str, signature: str | None) -> bool:
    if not (secret and gateway_order_id and gateway_payment_id and signature):
        return False
    expected = compute_signature(secret, gateway_order_id, gateway_payment_id)
    return hmac.compare_digest(expected, signature)
