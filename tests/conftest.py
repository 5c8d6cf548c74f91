"""Shared test fixtures for gemini-client tests."""

import json
import pytest
from typing import AsyncGenerator, Optional


# ─────────────────────────────────────────────────────────────────────
# MOCK DATA
# ─────────────────────────────────────────────────────────────────────

MOCK_API_KEY = "test-key-123"
MOCK_BASE_URL = "https://gemini.test/v1beta"
MOCK_MODEL = "models/gemini-1.5-flash"

GENERATE_URL = f"{MOCK_BASE_URL}/{MOCK_MODEL}:generateContent"
STREAM_URL = f"{MOCK_BASE_URL}/{MOCK_MODEL}:streamGenerateContent?alt=sse"
COUNT_TOKENS_URL = f"{MOCK_BASE_URL}/{MOCK_MODEL}:countTokens"
MODELS_URL = f"{MOCK_BASE_URL}/models"

MOCK_SAFETY_RATINGS = [
    {"category": "HARM_CATEGORY_HARASSMENT", "probability": "NEGLIGIBLE"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "probability": "LOW"},
]


def make_response(
    text: str,
    prompt_tokens: int = 5,
    candidate_tokens: int = 3,
    safety_ratings: Optional[list[dict]] = None,
    finish_reason: Optional[str] = None,
) -> dict:
    """Build a generateContent response body."""
    candidate = {
        "content": {"role": "model", "parts": [{"text": text}]},
        "index": 0,
        "safetyRatings": safety_ratings if safety_ratings is not None else MOCK_SAFETY_RATINGS,
    }
    if finish_reason:
        candidate["finishReason"] = finish_reason
    return {
        "candidates": [candidate],
        "usageMetadata": {
            "promptTokenCount": prompt_tokens,
            "candidatesTokenCount": candidate_tokens,
            "totalTokenCount": prompt_tokens + candidate_tokens,
        },
    }


def sse_stream(*events: dict) -> str:
    """Build an SSE body: one data line per event, blank line between events."""
    return "".join(f"data: {json.dumps(event)}\n\n" for event in events)


async def async_lines(lines: list[str]) -> AsyncGenerator[str, None]:
    """Convert a list of lines to an async iterator."""
    for line in lines:
        yield line


class RecordingLines:
    """
    Async line iterator that records how many lines were pulled
    and whether it was closed.
    """

    def __init__(self, lines: list[str]):
        self._lines = list(lines)
        self.pulled = 0
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self) -> str:
        if self.closed or self.pulled >= len(self._lines):
            raise StopAsyncIteration
        line = self._lines[self.pulled]
        self.pulled += 1
        return line

    async def aclose(self) -> None:
        self.closed = True


# ─────────────────────────────────────────────────────────────────────
# FIXTURES
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def codec():
    from gemini_client.codec import PydanticCodec
    return PydanticCodec()


@pytest.fixture
def correlator():
    from gemini_client.correlator import ResponseCorrelator
    return ResponseCorrelator()


@pytest.fixture
def client(correlator):
    """GeminiClient against the mock base URL with its own correlator."""
    from gemini_client.client import GeminiClient
    return GeminiClient(
        api_key=MOCK_API_KEY,
        base_url=MOCK_BASE_URL,
        timeout_seconds=5.0,
        correlator=correlator,
    )


@pytest.fixture
def story_model():
    """Single-turn text model."""
    from gemini_client.content import GenerativeModel, Role, TextTurn
    return GenerativeModel(
        model_name=MOCK_MODEL,
        contents=[TextTurn(role=Role.USER, text="Write a 50 word story about a magic backpack.")],
    )
