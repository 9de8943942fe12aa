"""
Pytest configuration and shared fixtures for BloomSphere client tests.

This module provides reusable fixtures and test utilities: sample files,
raw service payloads, model instances and fake clients for the remote
service.
"""
import asyncio
import json
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from src.bloomsphere.core.client import BloomSphereClient
from src.bloomsphere.models.bloom_models import BloomCategory, DetailedScoreItem
from src.bloomsphere.models.question_models import GeneratedQuestion, QuestionType


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


TEST_BASE_URL = "https://bloomsphere.test"


# ============================================================================
# ENVIRONMENT FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test without service overrides from the environment."""
    monkeypatch.delenv("BLOOMSPHERE_API_URL", raising=False)
    monkeypatch.delenv("BLOOMSPHERE_TIMEOUT", raising=False)


# ============================================================================
# FILE SYSTEM FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_pdf(temp_dir) -> Path:
    """Create a small PDF-named source document."""
    pdf = temp_dir / "photosynthesis.pdf"
    pdf.write_bytes(b"%PDF-1.4\nPhotosynthesis converts light into chemical energy.\n")
    return pdf


@pytest.fixture
def sample_png(temp_dir) -> Path:
    png = temp_dir / "exam.png"
    png.write_bytes(b"\x89PNG\r\n\x1a\nfake image data")
    return png


@pytest.fixture
def sample_txt(temp_dir) -> Path:
    txt = temp_dir / "notes.txt"
    txt.write_text("Plain notes are not accepted.")
    return txt


# ============================================================================
# RAW SERVICE PAYLOAD FIXTURES
# ============================================================================

@pytest.fixture
def generate_items() -> List[Dict[str, Any]]:
    """A Generate response with one item of each kind."""
    return [
        {"question_type": "text", "questioninfo": "Explain how chlorophyll absorbs light."},
        {
            "question_type": "TrueFalse",
            "questioninfo": {"question": "Photosynthesis releases oxygen.", "answer": True},
        },
        {
            "question_type": "MCQ",
            "questioninfo": {
                "question": "Which city hosts the Fete des Lumieres?",
                "options": ["Paris", "Lyon", "Nice"],
                "answer": "Lyon",
            },
        },
    ]


@pytest.fixture
def score_items() -> List[Dict[str, Any]]:
    """A Score response for two questions."""
    return [
        {
            "question": "Define photosynthesis.",
            "question_type": "text",
            "remembering": 6, "understanding": 3, "applying": 1,
            "analyzing": 0, "evaluating": 0, "creating": 0,
        },
        {
            "question": "Design an experiment to measure leaf respiration.",
            "question_type": "text",
            "remembering": 0, "understanding": 1, "applying": 2,
            "analyzing": 2, "evaluating": 1, "creating": 4,
        },
    ]


# ============================================================================
# MODEL FIXTURES
# ============================================================================

@pytest.fixture
def text_question() -> GeneratedQuestion:
    return GeneratedQuestion(
        id=0,
        text="Explain how chlorophyll absorbs light.",
        question_type=QuestionType.TEXT,
    )


@pytest.fixture
def true_false_question() -> GeneratedQuestion:
    return GeneratedQuestion(
        id=1,
        text="Photosynthesis releases oxygen.",
        question_type=QuestionType.TRUE_FALSE,
        answer=True,
    )


@pytest.fixture
def mcq_question() -> GeneratedQuestion:
    return GeneratedQuestion(
        id=2,
        text="Which city hosts the Fete des Lumieres?",
        question_type=QuestionType.MCQ,
        options=["Paris", "Lyon", "Nice"],
        answer="Lyon",
    )


@pytest.fixture
def sample_questions(text_question, true_false_question, mcq_question) -> List[GeneratedQuestion]:
    return [text_question, true_false_question, mcq_question]


def make_score_item(question: str, **scores: float) -> DetailedScoreItem:
    """Build a DetailedScoreItem; categories not given default to zero."""
    vector = {category: 0.0 for category in BloomCategory}
    for name, value in scores.items():
        vector[BloomCategory(name.capitalize())] = value
    return DetailedScoreItem(question=question, score=vector)


# ============================================================================
# REMOTE SERVICE FIXTURES
# ============================================================================

class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays a response."""

    def __init__(self, status_code: int = 200, json_body: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self.json_body = json_body
        self.text = text
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def make_client() -> Callable[..., BloomSphereClient]:
    """Factory building a client whose requests are served by a handler."""
    def _make(handler) -> BloomSphereClient:
        return BloomSphereClient(
            base_url=TEST_BASE_URL,
            transport=httpx.MockTransport(handler),
        )
    return _make


class FakeClient:
    """In-memory stand-in for BloomSphereClient used by controller tests."""

    def __init__(self, generate_result=None, score_result=None, error: Optional[Exception] = None):
        self.generate_result = generate_result if generate_result is not None else []
        self.score_result = score_result if score_result is not None else []
        self.error = error
        self.gate: Optional[asyncio.Event] = None
        self.generate_calls = []
        self.score_calls = []

    async def generate(self, request):
        self.generate_calls.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.generate_result

    async def score(self, request):
        self.score_calls.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.score_result


@pytest.fixture
def fake_client(generate_items, score_items) -> FakeClient:
    return FakeClient(generate_result=generate_items, score_result=score_items)
