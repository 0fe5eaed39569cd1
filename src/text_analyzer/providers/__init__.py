"""Per-kind request/response shapes, dispatched by provider kind."""

from text_analyzer.errors import UnsupportedProviderType
from text_analyzer.models.provider import ProviderConfig

from .base import ProviderRequest, ProviderShape
from .claude import ClaudeShape
from .custom import CustomShape
from .openai import OpenAIShape

SHAPES: dict[str, ProviderShape] = {
    shape.kind: shape for shape in (OpenAIShape(), ClaudeShape(), CustomShape())
}


def get_shape(kind: str) -> ProviderShape:
    try:
        return SHAPES[kind]
    except KeyError:
        raise UnsupportedProviderType(kind) from None


def build_request(provider: ProviderConfig, prompt: str) -> ProviderRequest:
    """Translate a provider record and prompt into a transport-ready request."""
    return get_shape(provider.kind).build_request(provider, prompt)


def extract_text(kind: str, envelope: dict) -> str:
    """Pull the model's free-text answer out of a provider envelope."""
    return get_shape(kind).extract_text(envelope)


__all__ = [
    "ClaudeShape",
    "CustomShape",
    "OpenAIShape",
    "ProviderRequest",
    "ProviderShape",
    "SHAPES",
    "build_request",
    "extract_text",
    "get_shape",
]
