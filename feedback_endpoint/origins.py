"""Origin allow-list and CORS header construction."""

import re
from collections.abc import Iterable

# http://localhost:5173, http://127.0.0.1:8080, http://[::1]:3000
LOOPBACK_ORIGIN_PATTERN = re.compile(r"http://(?:localhost|127\.0\.0\.1|\[::1\]):\d{1,5}")

ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def is_allowed_origin(
    origin: str | None,
    allowed_origins: Iterable[str] = (),
    allow_loopback: bool = True,
) -> str | None:
    """Return ``origin`` if it may call the endpoint, else None.

    Production origins are compared by exact string equality; loopback
    origins must match the whole pattern, never a prefix of it.
    """
    if not origin:
        return None
    if allow_loopback and LOOPBACK_ORIGIN_PATTERN.fullmatch(origin):
        return origin
    if origin in set(allowed_origins):
        return origin
    return None


def cors_headers(origin: str | None) -> dict[str, str]:
    """CORS headers echoing a validated origin; empty when there is none."""
    if not origin:
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Vary": "Origin",
    }
