"""Combine classification and preflight results into a final CORS outcome."""

from __future__ import annotations

from collections.abc import Sequence

from .classifiers import WILDCARD_ORIGIN, compute_needs_preflight, is_origin_allowed
from .models import ActualResult, Outcome, PreflightResult, RequestDescriptor, ServerPolicy
from .normalizers import normalize_header_list, split_allow_origins
from .preflight import compute_preflight_allowed

REASON_NO_ORIGIN = "No Origin header (not a CORS request)"
REASON_ORIGIN_NOT_ALLOWED = "Origin not allowed"
REASON_PREFLIGHT_FAILS = "Preflight would fail"
REASON_CREDENTIALS_NOT_ALLOWED = "Credentials not allowed"
REASON_WILDCARD_WITH_CREDENTIALS = "Invalid: allow-origin '*' cannot be used with credentials"


def compute_cors_outcome(request: RequestDescriptor, server: ServerPolicy) -> Outcome:
    """Evaluate ``request`` against ``server`` the way a conforming browser would.

    Every check runs regardless of earlier failures so that ``reasons`` lists
    all problems at once.
    """

    allow_origins = split_allow_origins(server.allow_origins)
    allow_methods = normalize_header_list(server.allow_methods)
    allow_headers = normalize_header_list(server.allow_headers)
    request_headers = normalize_header_list(request.request_headers)

    origin = request.origin or ""
    with_credentials = bool(request.with_credentials)
    allow_credentials = bool(server.allow_credentials)

    origin_allowed = is_origin_allowed(origin, allow_origins)
    needs_preflight = compute_needs_preflight(request.method, request_headers, request.content_type)
    preflight_allowed = compute_preflight_allowed(
        needs_preflight,
        origin_allowed,
        request.method,
        request_headers,
        allow_methods,
        allow_headers,
    )

    # A wildcard allow-origin can never be paired with allow-credentials.
    wildcard_with_creds_invalid = (
        with_credentials and WILDCARD_ORIGIN in allow_origins and allow_credentials
    )

    actual_allowed = (
        origin_allowed
        and preflight_allowed
        and (not with_credentials or allow_credentials)
        and not wildcard_with_creds_invalid
    )

    return Outcome(
        needs_preflight=needs_preflight,
        preflight=PreflightResult(needed=needs_preflight, allowed=preflight_allowed),
        actual=ActualResult(allowed=actual_allowed),
        is_origin_allowed=origin_allowed,
        response_headers=_build_response_headers(
            origin=origin,
            allow_origins=allow_origins,
            server=server,
            with_credentials=with_credentials,
        ),
        reasons=_collect_reasons(
            origin=origin,
            origin_allowed=origin_allowed,
            needs_preflight=needs_preflight,
            preflight_allowed=preflight_allowed,
            with_credentials=with_credentials,
            allow_credentials=allow_credentials,
            wildcard_with_creds_invalid=wildcard_with_creds_invalid,
        ),
    )


def _build_response_headers(
    *,
    origin: str,
    allow_origins: Sequence[str],
    server: ServerPolicy,
    with_credentials: bool,
) -> dict[str, str]:
    # Methods and headers are echoed from configuration, not narrowed to the request.
    if WILDCARD_ORIGIN in allow_origins and not with_credentials:
        allow_origin = WILDCARD_ORIGIN
    else:
        allow_origin = origin

    return {
        "access-control-allow-origin": allow_origin,
        "access-control-allow-credentials": "true" if server.allow_credentials else "false",
        "access-control-allow-methods": server.allow_methods or "",
        "access-control-allow-headers": server.allow_headers or "",
        "vary": "Origin",
    }


def _collect_reasons(
    *,
    origin: str,
    origin_allowed: bool,
    needs_preflight: bool,
    preflight_allowed: bool,
    with_credentials: bool,
    allow_credentials: bool,
    wildcard_with_creds_invalid: bool,
) -> tuple[str, ...]:
    reasons: list[str] = []
    if not origin:
        reasons.append(REASON_NO_ORIGIN)
    if origin and not origin_allowed:
        reasons.append(REASON_ORIGIN_NOT_ALLOWED)
    if needs_preflight and not preflight_allowed:
        reasons.append(REASON_PREFLIGHT_FAILS)
    if with_credentials and not allow_credentials:
        reasons.append(REASON_CREDENTIALS_NOT_ALLOWED)
    if wildcard_with_creds_invalid:
        reasons.append(REASON_WILDCARD_WITH_CREDENTIALS)
    return tuple(reasons)
