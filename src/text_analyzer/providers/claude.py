from __future__ import annotations

from text_analyzer.models.provider import ProviderConfig

from .base import MAX_TOKENS, ProviderRequest, as_text, first_item, json_headers, user_messages

DEFAULT_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


class ClaudeShape:
    """Anthropic messages API request/response shape."""

    kind = "claude"

    def build_request(self, provider: ProviderConfig, prompt: str) -> ProviderRequest:
        headers = json_headers()
        headers["x-api-key"] = provider.api_key.get_secret_value()
        headers["anthropic-version"] = ANTHROPIC_VERSION
        return ProviderRequest(
            url=provider.base_url or DEFAULT_URL,
            headers=headers,
            body={
                "model": provider.model,
                "max_tokens": MAX_TOKENS,
                "messages": user_messages(prompt),
            },
        )

    def extract_text(self, envelope: dict) -> str:
        return as_text(first_item(envelope.get("content")).get("text"))
