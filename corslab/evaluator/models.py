"""Typed records exchanged with the CORS evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RequestDescriptor:
    """A hypothetical request a browser script is about to send."""

    origin: str | None = None
    method: str | None = "GET"
    with_credentials: bool = False
    request_headers: str | None = ""
    content_type: str | None = ""


@dataclass(frozen=True)
class ServerPolicy:
    """CORS configuration of the server under test, as raw CSV strings."""

    allow_origins: str | None = ""
    allow_methods: str | None = ""
    allow_headers: str | None = ""
    allow_credentials: bool = False


@dataclass(frozen=True)
class PreflightResult:
    needed: bool
    allowed: bool


@dataclass(frozen=True)
class ActualResult:
    allowed: bool


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating one request against one policy."""

    needs_preflight: bool
    preflight: PreflightResult
    actual: ActualResult
    is_origin_allowed: bool
    response_headers: dict[str, str] = field(default_factory=dict)
    reasons: tuple[str, ...] = ()
