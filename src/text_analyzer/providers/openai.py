from __future__ import annotations

from text_analyzer.models.provider import ProviderConfig

from .base import (
    MAX_TOKENS,
    TEMPERATURE,
    ProviderRequest,
    as_text,
    first_item,
    json_headers,
    user_messages,
)

DEFAULT_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIShape:
    """OpenAI chat-completions request/response shape."""

    kind = "openai"

    def build_request(self, provider: ProviderConfig, prompt: str) -> ProviderRequest:
        return ProviderRequest(
            url=provider.base_url or DEFAULT_URL,
            headers=json_headers(Authorization=f"Bearer {provider.api_key.get_secret_value()}"),
            body={
                "model": provider.model,
                "messages": user_messages(prompt),
                "max_tokens": MAX_TOKENS,
                "temperature": TEMPERATURE,
            },
        )

    def extract_text(self, envelope: dict) -> str:
        message = first_item(envelope.get("choices")).get("message")
        if not isinstance(message, dict):
            return ""
        return as_text(message.get("content"))
