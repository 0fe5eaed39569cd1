from __future__ import annotations

from text_analyzer.errors import ConfigurationError
from text_analyzer.models.provider import ProviderConfig

from .base import MAX_TOKENS, ProviderRequest, as_text, json_headers

# Envelope keys probed in order for the answer text.
TEXT_KEYS = ("response", "content", "text")


class CustomShape:
    """Generic completion endpoint: flat prompt in, flat text out."""

    kind = "custom"

    def build_request(self, provider: ProviderConfig, prompt: str) -> ProviderRequest:
        url = (provider.base_url or "").strip()
        if not url:
            raise ConfigurationError(
                f"Provider '{provider.id}' is of type custom and requires a base URL"
            )
        return ProviderRequest(
            url=url,
            headers=json_headers(Authorization=f"Bearer {provider.api_key.get_secret_value()}"),
            body={
                "model": provider.model,
                "prompt": prompt,
                "max_tokens": MAX_TOKENS,
            },
        )

    def extract_text(self, envelope: dict) -> str:
        for key in TEXT_KEYS:
            text = as_text(envelope.get(key))
            if text:
                return text
        return ""
