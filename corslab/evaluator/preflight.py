"""Authorization of a hypothetical preflight against a server policy."""

from __future__ import annotations

from collections.abc import Sequence

from .classifiers import is_simple_header_name, normalize_method


def compute_preflight_allowed(
    needs_preflight: bool,
    origin_allowed: bool,
    method: str | None,
    request_headers: Sequence[str],
    allow_methods: Sequence[str],
    allow_headers: Sequence[str],
) -> bool:
    """Return True when the server would approve the preflight.

    ``request_headers``, ``allow_methods`` and ``allow_headers`` are expected
    in their normalized lowercase form. A request that needs no preflight is
    trivially allowed.
    """

    if not needs_preflight:
        return True
    if not origin_allowed:
        return False

    if normalize_method(method).lower() not in allow_methods:
        return False

    return all(
        header in allow_headers or is_simple_header_name(header) for header in request_headers
    )
