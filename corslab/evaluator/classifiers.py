"""Simple-versus-non-simple classification of request features."""

from __future__ import annotations

from collections.abc import Iterable

SIMPLE_METHODS = frozenset({"GET", "HEAD", "POST"})
SIMPLE_HEADER_NAMES = frozenset({"accept", "accept-language", "content-language", "content-type"})
SIMPLE_CONTENT_TYPES = frozenset(
    {"application/x-www-form-urlencoded", "multipart/form-data", "text/plain", ""}
)
WILDCARD_ORIGIN = "*"


def normalize_method(method: str | None) -> str:
    """Uppercase a request method, defaulting to GET when absent."""

    return str(method or "GET").strip().upper() or "GET"


def is_simple_header_name(name: str) -> bool:
    return str(name).lower() in SIMPLE_HEADER_NAMES


def is_simple_content_type(value: str | None) -> bool:
    """Return True for the three form-compatible content types, or no content type."""

    return str(value or "").lower().strip() in SIMPLE_CONTENT_TYPES


def is_origin_allowed(origin: str | None, allow_origins: Iterable[str]) -> bool:
    if not origin:
        return False
    allowed = tuple(allow_origins)
    return WILDCARD_ORIGIN in allowed or origin in allowed


def compute_needs_preflight(
    method: str | None,
    request_headers: Iterable[str],
    content_type: str | None,
) -> bool:
    """Decide whether a browser would send an OPTIONS preflight first.

    The method is checked first, then the author request headers, and the
    content type only matters for POST since GET and HEAD carry no body.
    """

    request_method = normalize_method(method)
    if request_method not in SIMPLE_METHODS:
        return True
    if not all(is_simple_header_name(header) for header in request_headers):
        return True
    if request_method == "POST" and not is_simple_content_type(content_type):
        return True
    return False
