"""Response error extraction for load test observability.

Parses storefront API error responses into human-readable messages. Every
error body has the shape ``{"error": <message or {field: [messages]}>, "code": <slug>}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except Exception:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict) or "error" not in body:
        return str(body)[:300]

    error = body["error"]
    if isinstance(error, dict):
        detail = " | ".join(f"{field}: {'; '.join(map(str, msgs)) if isinstance(msgs, list) else msgs}" for field, msgs in error.items())
    else:
        detail = str(error)

    code = body.get("code")
    return f"[{code}] {detail}" if code else detail
