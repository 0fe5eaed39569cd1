"""Pydantic models for provider configuration records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr

PROVIDER_KINDS = ("openai", "claude", "custom")


class ProviderTuning(BaseModel):
    temperature: float = 0.3
    max_tokens: int = 1000
    timeout_ms: int = Field(default=30000, ge=1)
    retry_attempts: int = Field(default=3, ge=0, le=10)

    model_config = ConfigDict(frozen=True)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


class ProviderConfig(BaseModel):
    """A configured LLM backend.

    ``kind`` stays a plain string: an unknown kind is a dispatch error raised
    when the request is built, not a validation error here. Likewise a
    ``custom`` provider without ``base_url`` is accepted and rejected later.
    """

    id: str
    name: str
    kind: str  # openai | claude | custom
    api_key: SecretStr = SecretStr("")
    base_url: str | None = None
    model: str
    enabled: bool = True
    tuning: ProviderTuning = Field(default_factory=ProviderTuning)

    model_config = ConfigDict(frozen=True)
