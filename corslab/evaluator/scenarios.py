"""Built-in teaching scenarios covering the canonical CORS cases."""

from __future__ import annotations

from dataclasses import dataclass

from .models import RequestDescriptor, ServerPolicy


class ScenarioNotFoundError(KeyError):
    """Raised when a scenario key is not registered."""


@dataclass(frozen=True)
class Scenario:
    key: str
    title: str
    description: str
    request: RequestDescriptor
    server: ServerPolicy


_SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        key="simple-get",
        title="Simple GET from an allowed origin",
        description="A GET with only safelisted headers skips the preflight and is allowed.",
        request=RequestDescriptor(origin="https://a.com", method="GET"),
        server=ServerPolicy(allow_origins="https://a.com", allow_methods="GET,POST"),
    ),
    Scenario(
        key="origin-denied",
        title="Origin not on the allow list",
        description="The server only trusts https://a.com, so a script on evil.com is blocked.",
        request=RequestDescriptor(origin="https://evil.com", method="GET"),
        server=ServerPolicy(allow_origins="https://a.com", allow_methods="GET,POST"),
    ),
    Scenario(
        key="preflight-denied",
        title="PUT not covered by allow-methods",
        description="PUT is not a simple method; the preflight fails because only GET and POST are allowed.",
        request=RequestDescriptor(origin="https://a.com", method="PUT"),
        server=ServerPolicy(allow_origins="https://a.com", allow_methods="get,post"),
    ),
    Scenario(
        key="preflight-allowed",
        title="Preflighted PUT with a custom header",
        description="PUT with X-Request-ID needs a preflight, which the policy approves.",
        request=RequestDescriptor(
            origin="https://a.com",
            method="PUT",
            request_headers="X-Request-ID, Content-Type",
            content_type="application/json",
        ),
        server=ServerPolicy(
            allow_origins="https://a.com",
            allow_methods="GET,POST,PUT",
            allow_headers="X-Request-ID",
        ),
    ),
    Scenario(
        key="credentials-denied",
        title="Cookies sent but credentials disallowed",
        description="Origin and method are fine, but the server does not allow credentials.",
        request=RequestDescriptor(origin="https://a.com", method="GET", with_credentials=True),
        server=ServerPolicy(allow_origins="https://a.com", allow_methods="GET", allow_credentials=False),
    ),
    Scenario(
        key="wildcard-with-credentials",
        title="Wildcard origin combined with credentials",
        description="allow-origin '*' can never be used for a credentialed request.",
        request=RequestDescriptor(origin="https://a.com", method="GET", with_credentials=True),
        server=ServerPolicy(allow_origins="*", allow_methods="GET", allow_credentials=True),
    ),
    Scenario(
        key="same-origin",
        title="No Origin header",
        description="Without an Origin header the request is not a CORS request at all.",
        request=RequestDescriptor(origin="", method="GET"),
        server=ServerPolicy(allow_origins="*", allow_methods="GET"),
    ),
)

_BY_KEY = {scenario.key: scenario for scenario in _SCENARIOS}


def list_scenarios() -> tuple[Scenario, ...]:
    return _SCENARIOS


def get_scenario(key: str) -> Scenario:
    try:
        return _BY_KEY[key]
    except KeyError as exc:
        raise ScenarioNotFoundError(f"Unknown scenario '{key}'") from exc
