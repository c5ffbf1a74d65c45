"""CORS handling for the corslab API, driven by the evaluator itself."""

from __future__ import annotations

from flask import Flask, Response, make_response, request

from corslab.evaluator import (
    Outcome,
    RequestDescriptor,
    ServerPolicy,
    compute_cors_outcome,
    split_allow_origins,
)

CORS_CONFIGURED_FLAG = "_cors_configured"
CREDENTIAL_HEADERS = ("Cookie", "Authorization")


def policy_from_config(app: Flask) -> ServerPolicy:
    """Build the service's own ServerPolicy from ``CORS_*`` settings."""

    return ServerPolicy(
        allow_origins=_join(app.config.get("CORS_ALLOWED_ORIGINS", "")),
        allow_methods=_join(app.config.get("CORS_ALLOWED_METHODS", "")),
        allow_headers=_join(app.config.get("CORS_ALLOWED_HEADERS", "")),
        allow_credentials=bool(app.config.get("CORS_ALLOW_CREDENTIALS", False)),
    )


def init_cors(app: Flask) -> None:
    """Answer preflights and decorate responses according to the configured policy."""

    if app.config.get(CORS_CONFIGURED_FLAG):
        return

    policy = policy_from_config(app)
    if not split_allow_origins(policy.allow_origins):
        return

    @app.before_request
    def handle_preflight():
        if not _is_preflight():
            return None

        outcome = compute_cors_outcome(_describe_preflight(), policy)
        if not outcome.is_origin_allowed or not outcome.preflight.allowed:
            return make_response("", 403)

        response = make_response("", 204)
        _apply_origin_headers(response, outcome)
        response.headers["Access-Control-Allow-Methods"] = outcome.response_headers[
            "access-control-allow-methods"
        ]
        response.headers["Access-Control-Allow-Headers"] = outcome.response_headers[
            "access-control-allow-headers"
        ]
        return response

    @app.after_request
    def apply_cors(response: Response):
        if _is_preflight() or not request.headers.get("Origin"):
            return response

        outcome = compute_cors_outcome(_describe_actual(), policy)
        if outcome.actual.allowed:
            _apply_origin_headers(response, outcome)
        return response

    app.config[CORS_CONFIGURED_FLAG] = True


def _is_preflight() -> bool:
    return (
        request.method == "OPTIONS"
        and bool(request.headers.get("Origin"))
        and bool(request.headers.get("Access-Control-Request-Method"))
    )


def _is_credentialed() -> bool:
    return any(request.headers.get(name) for name in CREDENTIAL_HEADERS)


def _describe_preflight() -> RequestDescriptor:
    return RequestDescriptor(
        origin=request.headers.get("Origin"),
        method=request.headers.get("Access-Control-Request-Method"),
        with_credentials=_is_credentialed(),
        request_headers=request.headers.get("Access-Control-Request-Headers", ""),
        content_type="",
    )


def _describe_actual() -> RequestDescriptor:
    # Author headers were vetted by the preflight, so only method and body type matter here.
    return RequestDescriptor(
        origin=request.headers.get("Origin"),
        method=request.method,
        with_credentials=_is_credentialed(),
        request_headers="",
        content_type=request.mimetype,
    )


def _apply_origin_headers(response: Response, outcome: Outcome) -> None:
    headers = outcome.response_headers
    response.headers["Access-Control-Allow-Origin"] = headers["access-control-allow-origin"]
    if headers["access-control-allow-credentials"] == "true":
        response.headers["Access-Control-Allow-Credentials"] = "true"
    response.headers["Vary"] = _merge_vary_header(response.headers.get("Vary"), headers["vary"])


def _merge_vary_header(existing: str | None, value: str) -> str:
    if not existing:
        return value
    items = [item.strip() for item in existing.split(",") if item.strip()]
    if value not in items:
        items.append(value)
    return ", ".join(items)


def _join(raw) -> str:
    if isinstance(raw, str):
        return raw
    return ",".join(str(item) for item in raw or ())
