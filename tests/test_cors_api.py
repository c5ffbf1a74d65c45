from __future__ import annotations


def test_evaluate_returns_outcome_for_allowed_request(client):
    response = client.post(
        "/api/v1/cors/evaluate",
        json={
            "request": {"origin": "https://a.com", "method": "GET", "withCredentials": False},
            "server": {"allowOrigins": "https://a.com", "allowMethods": "GET,POST"},
        },
    )

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["needsPreflight"] is False
    assert payload["preflight"] == {"needed": False, "allowed": True}
    assert payload["actual"] == {"allowed": True}
    assert payload["isOriginAllowed"] is True
    assert payload["responseHeaders"]["access-control-allow-origin"] == "https://a.com"
    assert payload["responseHeaders"]["vary"] == "Origin"
    assert payload["reasons"] == []


def test_evaluate_lists_every_failure(client):
    response = client.post(
        "/api/v1/cors/evaluate",
        json={
            "request": {
                "origin": "https://evil.com",
                "method": "PUT",
                "withCredentials": True,
                "requestHeaders": "X-Custom",
                "contentType": "application/json",
            },
            "server": {"allowOrigins": "https://a.com", "allowMethods": "get"},
        },
    )

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["actual"]["allowed"] is False
    assert payload["reasons"] == [
        "Origin not allowed",
        "Preflight would fail",
        "Credentials not allowed",
    ]


def test_evaluate_flags_wildcard_with_credentials(client):
    response = client.post(
        "/api/v1/cors/evaluate",
        json={
            "request": {"origin": "https://a.com", "withCredentials": True},
            "server": {"allowOrigins": "*", "allowCredentials": True},
        },
    )

    payload = response.get_json()
    assert payload["actual"]["allowed"] is False
    assert "Invalid: allow-origin '*' cannot be used with credentials" in payload["reasons"]
    assert payload["responseHeaders"]["access-control-allow-credentials"] == "true"


def test_evaluate_accepts_empty_body_sections(client):
    response = client.post("/api/v1/cors/evaluate", json={})

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["actual"]["allowed"] is False
    assert payload["reasons"] == ["No Origin header (not a CORS request)"]
    assert payload["responseHeaders"]["access-control-allow-origin"] == ""


def test_evaluate_accepts_null_strings(client):
    response = client.post(
        "/api/v1/cors/evaluate",
        json={"request": {"origin": "https://a.com", "method": None}, "server": {"allowOrigins": "*"}},
    )

    assert response.status_code == 200
    assert response.get_json()["actual"]["allowed"] is True


def test_evaluate_rejects_wrong_types(client):
    response = client.post(
        "/api/v1/cors/evaluate",
        json={"request": {"withCredentials": "sometimes"}},
    )

    assert response.status_code == 422


def test_list_scenarios_includes_outcomes(client):
    response = client.get("/api/v1/cors/scenarios")

    assert response.status_code == 200
    scenarios = {item["key"]: item for item in response.get_json()["scenarios"]}
    assert scenarios["simple-get"]["outcome"]["actual"]["allowed"] is True
    assert scenarios["origin-denied"]["outcome"]["reasons"] == ["Origin not allowed"]
    assert scenarios["credentials-denied"]["request"]["withCredentials"] is True


def test_get_scenario_by_key(client):
    response = client.get("/api/v1/cors/scenarios/preflight-denied")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["key"] == "preflight-denied"
    assert payload["server"]["allowMethods"] == "get,post"
    assert payload["outcome"]["needsPreflight"] is True
    assert payload["outcome"]["preflight"]["allowed"] is False


def test_get_unknown_scenario_returns_404(client):
    response = client.get("/api/v1/cors/scenarios/nope")

    assert response.status_code == 404
    payload = response.get_json()
    assert payload["message"] == "Unknown scenario 'nope'"
    assert payload["key"] == "nope"
