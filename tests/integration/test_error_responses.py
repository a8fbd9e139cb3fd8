"""Integration tests for validation error responses.

Tests the complete flow through the FastAPI application:
1. Route binding registers resource handlers at startup
2. Constraint violations are resolved to labelled messages
3. FastAPI's own request validation uses the same payload
"""

import pytest
from fastapi.testclient import TestClient

from constraint_messages.main import app

pytestmark = pytest.mark.integration


def test_blank_query_param_of_bound_handler(client: TestClient):
    response = client.post("/accounts", params={"name": " "})

    assert response.status_code == 422
    assert response.json() == {"errors": ["query param name must not be blank"]}


def test_valid_request_passes_through(client: TestClient):
    response = client.post("/accounts", params={"name": " Ada "})

    assert response.status_code == 200
    assert response.json() == {"name": "Ada"}


def test_invalid_response_body(client: TestClient):
    response = client.get("/accounts/7")

    assert response.status_code == 500
    assert response.json() == {"errors": ["server response age must be positive"]}


def test_helper_method_falls_back_to_raw_path(client: TestClient):
    response = client.put("/accounts/rename", params={"name": "x"})

    assert response.status_code == 422
    assert response.json() == {"errors": ["normalize.arg0 must not be blank"]}


def test_failure_without_violations_uses_exception_text(client: TestClient):
    response = client.post("/accounts/import")

    assert response.status_code == 422
    assert response.json() == {"errors": ["bad request"]}


def test_bean_missing_field_is_internal_inconsistency(client: TestClient):
    response = client.post("/accounts/search")

    assert response.status_code == 500
    body = response.json()
    assert body["error_code"] == "INTERNAL_INCONSISTENCY"
    assert "size" in body["detail"]


def test_request_validation_uses_same_payload(client: TestClient):
    response = client.get("/accounts/not-a-number")

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert len(errors) == 1
    assert errors[0].startswith("path param account_id ")


def test_openapi_documents_error_payload():
    with TestClient(app) as test_client:
        schema = test_client.get("/openapi.json").json()

    assert "ErrorPayload" in schema["components"]["schemas"]
    assert "HTTPValidationError" not in schema["components"]["schemas"]


def test_health_check():
    with TestClient(app) as test_client:
        response = test_client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"
