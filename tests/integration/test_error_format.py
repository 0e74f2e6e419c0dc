"""Integration tests for problem-details error responses."""

import pytest

pytestmark = pytest.mark.integration


class TestProblemDetails:
    def test_business_error_has_problem_shape(self, api_client_with_correlation):
        client, cid = api_client_with_correlation
        response = client.get("/api/v1/products/999/")

        assert response.status_code == 404
        assert response["Content-Type"].startswith("application/problem+json")
        data = response.json()
        for key in ("type", "title", "status", "detail", "instance", "code"):
            assert key in data
        assert data["instance"] == "/api/v1/products/999/"
        assert data["traceId"] == cid

    def test_malformed_json_has_problem_shape(self, api_client):
        response = api_client.post(
            "/api/v1/products/", data="{", content_type="application/json"
        )

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "PARSE_ERROR"
        assert data["status"] == 400

    def test_method_not_allowed_has_problem_shape(self, api_client):
        response = api_client.post("/api/v1/products/1/", {}, format="json")

        assert response.status_code == 405
        assert response.json()["code"] == "METHOD_NOT_ALLOWED"

    def test_non_object_body_is_a_validation_error(self, api_client):
        response = api_client.post("/api/v1/products/", [1, 2], format="json")

        assert response.status_code == 400
        assert "non_field_errors" in response.json()["errors"]
