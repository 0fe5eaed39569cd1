from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from text_analyzer.models.provider import ProviderConfig

# Fixed request limits; provider tuning does not override them.
MAX_TOKENS = 1000
TEMPERATURE = 0.3


@dataclass(frozen=True)
class ProviderRequest:
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)


class ProviderShape(Protocol):
    """Request building and response extraction for one provider kind."""

    kind: str

    def build_request(self, provider: ProviderConfig, prompt: str) -> ProviderRequest:
        ...

    def extract_text(self, envelope: dict) -> str:
        """Return the model's answer, or "" when the envelope lacks one."""
        ...


def json_headers(**extra: str) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    headers.update(extra)
    return headers


def user_messages(prompt: str) -> list[dict[str, str]]:
    return [{"role": "user", "content": prompt}]


def first_item(value: object) -> dict:
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    return {}


def as_text(value: object) -> str:
    return value if isinstance(value, str) else ""
