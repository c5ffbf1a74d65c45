from __future__ import annotations


def test_docs_swagger_ui(client):
    response = client.get("/docs/")
    assert response.status_code == 200
    assert b"Swagger" in response.data


def test_openapi_spec_lists_endpoints(client):
    response = client.get("/docs/openapi.json")
    assert response.status_code == 200
    paths = response.get_json()["paths"]
    assert "/health" in paths
    assert "/api/v1/cors/evaluate" in paths
    assert "/api/v1/cors/scenarios" in paths
    assert "/api/v1/cors/scenarios/{key}" in paths
