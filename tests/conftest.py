"""Shared test fixtures."""

from __future__ import annotations

import itertools
from unittest.mock import AsyncMock

import pytest

from text_analyzer.config import RetryConfig
from text_analyzer.models.provider import ProviderConfig, ProviderTuning
from text_analyzer.service import AnalysisService

SAMPLE_TEXT = (
    "Large language models can review prose quickly. "
    "They point out unclear sentences and suggest better wording. "
    "Writers still decide which suggestions to keep."
)


def openai_envelope(text: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


def claude_envelope(text: str) -> dict:
    return {"content": [{"type": "text", "text": text}]}


def make_provider(kind: str = "openai", **overrides) -> ProviderConfig:
    tuning = overrides.pop("tuning", None) or ProviderTuning(retry_attempts=2, timeout_ms=5000)
    data = {
        "id": f"{kind}-test",
        "name": f"{kind} test",
        "kind": kind,
        "api_key": "sk-test",
        "model": "test-model",
        "tuning": tuning,
    }
    data.update(overrides)
    return ProviderConfig(**data)


@pytest.fixture
def sample_analysis() -> dict:
    """Well-formed analysis payload: 3 suggestions without ids, 2 with."""
    suggestion = {
        "type": "clarity",
        "priority": "high",
        "message": "Sentence is hard to follow",
        "originalText": "They point out unclear sentences",
        "suggestedText": "They flag unclear sentences",
        "reason": "Shorter verbs read faster",
    }
    return {
        "suggestions": [
            dict(suggestion),
            dict(suggestion, id="s-1"),
            dict(suggestion, type="grammar"),
            dict(suggestion, id="s-2", priority="low"),
            dict(suggestion, type="structure"),
        ],
        "semanticTerms": [
            {
                "term": "language model",
                "category": "technology",
                "importance": 0.9,
                "context": ["Large language models can review prose quickly."],
            }
        ],
        "readabilityScore": {
            "score": 74,
            "level": "medium",
            "factors": ["Average sentence length: 8 words"],
        },
        "summary": "Clear text with minor wording issues.",
    }


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"gen-{next(counter)}"


@pytest.fixture
def provider() -> ProviderConfig:
    return make_provider("openai")


@pytest.fixture
def mock_transport() -> AsyncMock:
    transport = AsyncMock()
    transport.post = AsyncMock(return_value=openai_envelope("{}"))
    return transport


@pytest.fixture
def service(mock_transport, id_factory) -> AnalysisService:
    return AnalysisService(
        mock_transport,
        id_factory=id_factory,
        retry=RetryConfig(backoff_min_seconds=0, backoff_max_seconds=0),
    )
