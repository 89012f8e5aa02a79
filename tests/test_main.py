"""Integration tests for the HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, patch

from bfhl.ai.exceptions import (
    AnswerServiceInvalidResponseError,
    AnswerServiceRejectedError,
    AnswerServiceTimeoutError,
    AnswerServiceUnavailableError,
)
from bfhl.config import Settings, get_settings
from bfhl.dependencies import get_answer_provider
from bfhl.main import app

EMAIL = "student@example.edu"


def _settings(**overrides) -> Settings:
    values = {"OFFICIAL_EMAIL": EMAIL, "GEMINI_API_KEY": "test-key"}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def provider():
    mock_provider = AsyncMock()
    mock_provider.ask.return_value = "Paris."
    return mock_provider


@pytest.fixture
def client(provider):
    app.dependency_overrides[get_settings] = lambda: _settings()
    app.dependency_overrides[get_answer_provider] = lambda: provider
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _assert_success(response, data):
    assert response.status_code == 200
    assert response.json() == {"is_success": True, "official_email": EMAIL, "data": data}


def _assert_failure(response, status_code, error=None):
    assert response.status_code == status_code
    body = response.json()
    assert body["is_success"] is False
    assert "data" not in body
    assert "official_email" not in body
    if error is not None:
        assert body["error"] == error


class TestHealth:
    """Tests for GET /health."""

    def test_health_reports_identity(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"is_success": True, "official_email": EMAIL}

    def test_health_without_identity(self, client):
        """Test a missing identity is a server configuration error."""
        app.dependency_overrides[get_settings] = lambda: _settings(OFFICIAL_EMAIL="")

        response = client.get("/health")

        _assert_failure(response, 500, "Server configuration error")


class TestComputeScenarios:
    """Tests for the documented POST /bfhl scenarios."""

    def test_fibonacci(self, client):
        _assert_success(client.post("/bfhl", json={"fibonacci": 7}), [0, 1, 1, 2, 3, 5, 8])

    def test_fibonacci_zero(self, client):
        _assert_success(client.post("/bfhl", json={"fibonacci": 0}), [])

    def test_prime(self, client):
        _assert_success(client.post("/bfhl", json={"prime": [2, 4, 7, 9, 11]}), [2, 7, 11])

    def test_prime_empty(self, client):
        _assert_success(client.post("/bfhl", json={"prime": []}), [])

    def test_lcm(self, client):
        _assert_success(client.post("/bfhl", json={"lcm": [12, 18, 24]}), 72)

    def test_lcm_with_zero(self, client):
        """Test a zero result is still returned as data."""
        _assert_success(client.post("/bfhl", json={"lcm": [3, 0]}), 0)

    def test_hcf(self, client):
        _assert_success(client.post("/bfhl", json={"hcf": [24, 36, 60]}), 12)

    def test_hcf_with_zero(self, client):
        _assert_success(client.post("/bfhl", json={"hcf": [0, 5]}), 5)

    def test_ai(self, client, provider):
        _assert_success(client.post("/bfhl", json={"AI": "Capital of France?"}), "Paris")
        provider.ask.assert_awaited_once()


class TestComputeValidation:
    """Tests for 400 responses from POST /bfhl."""

    def test_negative_fibonacci(self, client):
        _assert_failure(
            client.post("/bfhl", json={"fibonacci": -1}),
            400,
            "Fibonacci input must be non-negative",
        )

    def test_empty_body(self, client):
        _assert_failure(client.post("/bfhl", json={}), 400, "Request body cannot be empty")

    def test_multiple_keys(self, client):
        _assert_failure(
            client.post("/bfhl", json={"fibonacci": 1, "prime": [2]}),
            400,
            "Request must contain exactly one key",
        )

    def test_unknown_key(self, client):
        response = client.post("/bfhl", json={"sum": [1, 2]})

        _assert_failure(response, 400)
        assert response.json()["error"].startswith("Invalid key")

    @pytest.mark.parametrize("body", [[1, 2], "text", 42])
    def test_non_object_body(self, client, body):
        _assert_failure(client.post("/bfhl", json=body), 400, "Invalid request body")

    def test_missing_body(self, client):
        _assert_failure(client.post("/bfhl"), 400, "Invalid request body")

    def test_malformed_json(self, client):
        response = client.post(
            "/bfhl",
            content=b'{"fibonacci": ',
            headers={"Content-Type": "application/json"},
        )

        _assert_failure(response, 400, "Invalid JSON")

    def test_non_finite_constants_are_invalid_json(self, client):
        """Test NaN and Infinity literals are rejected while parsing."""
        for literal in (b"NaN", b"Infinity", b"-Infinity"):
            response = client.post(
                "/bfhl",
                content=b'{"fibonacci": ' + literal + b"}",
                headers={"Content-Type": "application/json"},
            )

            _assert_failure(response, 400, "Invalid JSON")

    def test_non_json_content_type_is_not_parsed(self, client):
        """Test a text/plain body is read as an empty object."""
        response = client.post(
            "/bfhl",
            content=b'{"fibonacci": 3}',
            headers={"Content-Type": "text/plain"},
        )

        _assert_failure(response, 400, "Request body cannot be empty")

    def test_json_suffix_content_type_is_parsed(self, client):
        response = client.post(
            "/bfhl",
            content=b'{"fibonacci": 3}',
            headers={"Content-Type": "application/vnd.api+json; charset=utf-8"},
        )

        _assert_success(response, [0, 1, 1])

    def test_empty_lcm(self, client):
        _assert_failure(client.post("/bfhl", json={"lcm": []}), 400, "Array cannot be empty")

    def test_invalid_array_element(self, client):
        _assert_failure(
            client.post("/bfhl", json={"hcf": [4, 2.5]}),
            400,
            "Invalid integer at index 1",
        )

    def test_lcm_overflow(self, client):
        _assert_failure(
            client.post("/bfhl", json={"lcm": [999983, 999979, 999961, 999959]}),
            400,
            "LCM calculation overflow - values too large",
        )

    def test_blank_question(self, client, provider):
        """Test validation runs before the answer service is called."""
        _assert_failure(client.post("/bfhl", json={"AI": "  "}), 400, "AI question cannot be empty")
        provider.ask.assert_not_awaited()


class TestComputeConfiguration:
    """Tests for 500 responses caused by missing settings."""

    def test_missing_identity(self, client):
        app.dependency_overrides[get_settings] = lambda: _settings(OFFICIAL_EMAIL="")

        _assert_failure(
            client.post("/bfhl", json={"fibonacci": 3}),
            500,
            "Server configuration error",
        )

    def test_missing_ai_credential(self, client):
        """Test the AI operation fails without a provider."""
        app.dependency_overrides[get_answer_provider] = lambda: None

        _assert_failure(
            client.post("/bfhl", json={"AI": "Capital of France?"}),
            500,
            "AI service not configured",
        )

    def test_empty_api_key_setting(self, client, provider):
        """Test an empty GEMINI_API_KEY disables the AI operation end to end."""
        app.dependency_overrides[get_settings] = lambda: _settings(GEMINI_API_KEY="")
        del app.dependency_overrides[get_answer_provider]

        _assert_failure(
            client.post("/bfhl", json={"AI": "Capital of France?"}),
            500,
            "AI service not configured",
        )
        provider.ask.assert_not_awaited()

    def test_missing_ai_credential_leaves_other_operations(self, client):
        app.dependency_overrides[get_answer_provider] = lambda: None

        _assert_success(client.post("/bfhl", json={"hcf": [6, 9]}), 3)


class TestAnswerServiceFailures:
    """Tests for the mapping of answer service failures to statuses."""

    @pytest.mark.parametrize(
        "error, status_code, message",
        [
            (AnswerServiceRejectedError(status_code_upstream=400), 502, "AI service error"),
            (AnswerServiceUnavailableError(reason="refused"), 503, "AI service unavailable"),
            (AnswerServiceTimeoutError(timeout_seconds=10.0), 504, "AI service timeout"),
            (AnswerServiceInvalidResponseError(), 500, "AI service returned invalid response"),
        ],
    )
    def test_failure_status(self, client, provider, error, status_code, message):
        provider.ask.side_effect = error

        _assert_failure(client.post("/bfhl", json={"AI": "Capital of France?"}), status_code, message)

    def test_timeout_passed_to_provider(self, client, provider):
        app.dependency_overrides[get_settings] = lambda: _settings(AI_TIMEOUT_SECONDS=2.5)

        client.post("/bfhl", json={"AI": "Capital of France?"})

        assert provider.ask.call_args.kwargs["timeout"] == 2.5


class TestErrorHandlers:
    """Tests for the global error envelope."""

    def test_unknown_route(self, client):
        _assert_failure(client.get("/nowhere"), 404, "Route not found")

    def test_wrong_method(self, client):
        """Test an unsupported method on a known path is also 404."""
        _assert_failure(client.get("/bfhl"), 404, "Route not found")

    def test_unexpected_error_is_generic(self, client):
        """Test internal details never reach the client."""
        with patch("bfhl.compute.router.handle_compute", side_effect=RuntimeError("secret detail")):
            response = client.post("/bfhl", json={"fibonacci": 3})

        _assert_failure(response, 500, "Internal server error")
        assert "secret" not in response.text

    def test_body_too_large(self, client):
        response = client.post("/bfhl", json={"AI": "a" * 20000})

        _assert_failure(response, 413, "Request body too large")

    def test_streamed_body_too_large(self, client):
        """Test a chunked body without Content-Length is counted as it arrives."""
        chunks = (b"x" * 1024 for _ in range(30))

        response = client.post(
            "/bfhl",
            content=chunks,
            headers={"Content-Type": "application/json"},
        )

        _assert_failure(response, 413, "Request body too large")


class TestEnvelope:
    """Tests for response envelope serialization."""

    def test_success_keeps_falsy_data(self):
        from bfhl.compute.schemas import ComputeResponse

        content = ComputeResponse.success(official_email=EMAIL, data=0).to_content()

        assert content == {"is_success": True, "official_email": EMAIL, "data": 0}

    def test_failure_has_no_data(self):
        from bfhl.compute.schemas import ComputeResponse

        content = ComputeResponse.failure("Array cannot be empty").to_content()

        assert content == {"is_success": False, "error": "Array cannot be empty"}
