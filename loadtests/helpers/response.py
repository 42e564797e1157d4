"""Response error extraction for load test observability.

Parses cart API error responses into human-readable messages.
Handles two response shapes:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Cart errors (404/409/422/503): {"code": "...", "message": "...", "retryable": bool}
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
    except ValueError:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    # Pydantic validation errors: {"detail": [{"loc": [...], "msg": "..."}]}
    if "detail" in body and isinstance(body["detail"], list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    # Cart errors: {"code": "...", "message": "..."}
    if "code" in body:
        return f"{body['code']}: {body.get('message', '')}"

    # Unknown shape, stringify and truncate
    return str(body)[:300]


def is_expected_rejection(response: Response) -> bool:
    """Limit and stock refusals are correct behaviour under load, not failures."""
    try:
        code = response.json().get("code")
    except ValueError:
        return False
    return code in {"MAX_QUANTITY_EXCEEDED", "INSUFFICIENT_STOCK"}
