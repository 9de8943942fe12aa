"""
Integration tests for the remote service client (client.py).

Requests are served by httpx.MockTransport handlers, so no network access
is needed.

Tests cover:
- Endpoint URLs and request bodies
- Error detail for non-2xx responses
- Network failures and malformed bodies
- Configuration overrides
"""
import asyncio

import httpx
import pytest

from src.bloomsphere import config
from src.bloomsphere.core.client import BloomSphereClient
from src.bloomsphere.exceptions import ServiceError
from src.bloomsphere.models.api_models import (
    FilePayload, GenerateRequest, GenerationConfig, NumQuestions, ScoreRequest
)

from conftest import TEST_BASE_URL, RecordingHandler


@pytest.fixture
def generate_request() -> GenerateRequest:
    return GenerateRequest(
        file=FilePayload(filename="bio.pdf", content="JVBERi0=", mime_type="application/pdf"),
        config=GenerationConfig(
            user_input="",
            question_length="Medium",
            num_questions=NumQuestions(text=2, true_false=1, mcq=1),
            bloom_weights=dict(config.DEFAULT_WEIGHTS),
        ),
    )


# ============================================================================
# INITIALIZATION TESTS
# ============================================================================

@pytest.mark.unit
class TestClientInitialization:
    """Test client configuration."""

    def test_defaults_from_config(self):
        client = BloomSphereClient()

        assert client.base_url == config.API_BASE_URL
        assert client.timeout == config.REQUEST_TIMEOUT_SECONDS

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("BLOOMSPHERE_API_URL", "https://staging.example.org/")
        monkeypatch.setenv("BLOOMSPHERE_TIMEOUT", "15")

        client = BloomSphereClient()

        assert client.base_url == "https://staging.example.org"
        assert client.timeout == 15.0

    def test_explicit_arguments_win(self, monkeypatch):
        monkeypatch.setenv("BLOOMSPHERE_API_URL", "https://staging.example.org")

        client = BloomSphereClient(base_url="https://other.example.org", timeout=5)

        assert client.base_url == "https://other.example.org"
        assert client.timeout == 5


# ============================================================================
# REQUEST TESTS
# ============================================================================

@pytest.mark.integration
class TestClientRequests:
    """Test the two request types."""

    def test_score_posts_text(self, make_client, score_items):
        handler = RecordingHandler(json_body=score_items)
        client = make_client(handler)

        result = asyncio.run(client.score(ScoreRequest(questions="Define photosynthesis.")))

        assert result == score_items
        request = handler.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{TEST_BASE_URL}/analysequestion"
        assert request.headers["content-type"] == "application/json"
        assert handler.last_body == {"file": None, "questions": "Define photosynthesis."}

    def test_generate_posts_config(self, make_client, generate_items, generate_request):
        handler = RecordingHandler(json_body=generate_items)
        client = make_client(handler)

        result = asyncio.run(client.generate(generate_request))

        assert result == generate_items
        assert str(handler.requests[0].url) == f"{TEST_BASE_URL}/generatequestion"
        body = handler.last_body
        assert body["file"] == {
            "filename": "bio.pdf", "content": "JVBERi0=", "mimeType": "application/pdf"
        }
        assert body["config"]["numQuestions"] == {"text": 2, "trueFalse": 1, "mcq": 1}
        assert body["config"]["questionLength"] == "Medium"
        assert body["config"]["bloomWeights"]["Evaluating"] == 10


# ============================================================================
# ERROR HANDLING TESTS
# ============================================================================

@pytest.mark.integration
class TestClientErrors:
    """Test error reporting."""

    def test_error_body_is_surfaced(self, make_client):
        handler = RecordingHandler(status_code=422, text="PDF has no extractable text")
        client = make_client(handler)

        with pytest.raises(ServiceError) as exc_info:
            asyncio.run(client.score(ScoreRequest(questions="Q")))

        assert exc_info.value.detail == "PDF has no extractable text"
        assert exc_info.value.status_code == 422

    def test_empty_error_body_uses_status_line(self, make_client):
        handler = RecordingHandler(status_code=500, text="")
        client = make_client(handler)

        with pytest.raises(ServiceError) as exc_info:
            asyncio.run(client.score(ScoreRequest(questions="Q")))

        assert str(exc_info.value) == "Request failed: Internal Server Error"

    def test_network_failure(self, make_client):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(ServiceError) as exc_info:
            asyncio.run(client.score(ScoreRequest(questions="Q")))

        assert "connection refused" in str(exc_info.value)
        assert exc_info.value.status_code is None

    def test_invalid_base_url(self):
        client = BloomSphereClient(base_url="http://[::1")

        with pytest.raises(ServiceError) as exc_info:
            asyncio.run(client.score(ScoreRequest(questions="Q")))

        assert exc_info.value.status_code is None

    def test_non_list_body(self, make_client, generate_request):
        client = make_client(RecordingHandler(json_body={"error": "nope"}))

        with pytest.raises(ServiceError) as exc_info:
            asyncio.run(client.generate(generate_request))

        assert str(exc_info.value) == "Unexpected response format"

    def test_non_json_body(self, make_client, generate_request):
        client = make_client(RecordingHandler(text="<html>gateway</html>"))

        with pytest.raises(ServiceError):
            asyncio.run(client.generate(generate_request))
