"""In-memory provider registry: the records the UI edits and the core reads."""

from __future__ import annotations

import logging

from text_analyzer.config import AppConfig
from text_analyzer.errors import ConfigurationError
from text_analyzer.models.provider import ProviderConfig

logger = logging.getLogger(__name__)


class ProviderRegistry:
    def __init__(
        self,
        providers: list[ProviderConfig] | tuple[ProviderConfig, ...] = (),
        active_id: str | None = None,
    ):
        self._providers: dict[str, ProviderConfig] = {}
        for provider in providers:
            self.add(provider)
        self._active_id: str | None = None
        if active_id is not None:
            self.set_active(active_id)

    @classmethod
    def from_config(cls, config: AppConfig) -> ProviderRegistry:
        return cls(config.providers, active_id=config.active)

    def add(self, provider: ProviderConfig) -> None:
        if provider.id in self._providers:
            raise ValueError(f"Provider '{provider.id}' already exists")
        self._providers[provider.id] = provider

    def update(self, provider_id: str, **changes) -> ProviderConfig:
        """Replace a record with a revalidated copy carrying ``changes``."""
        current = self._require(provider_id)
        if "id" in changes and changes["id"] != provider_id:
            raise ValueError("Provider id cannot be changed")
        data = current.model_dump()
        data.update(changes)
        updated = ProviderConfig.model_validate(data)
        self._providers[provider_id] = updated
        return updated

    def delete(self, provider_id: str) -> None:
        self._require(provider_id)
        del self._providers[provider_id]
        if self._active_id == provider_id:
            self._active_id = None

    def set_active(self, provider_id: str | None) -> None:
        if provider_id is not None:
            self._require(provider_id)
        self._active_id = provider_id

    def get(self, provider_id: str) -> ProviderConfig | None:
        return self._providers.get(provider_id)

    def providers(self) -> list[ProviderConfig]:
        return list(self._providers.values())

    @property
    def active_id(self) -> str | None:
        return self._active_id

    def active(self) -> ProviderConfig | None:
        if self._active_id is None:
            return None
        return self._providers.get(self._active_id)

    def _require(self, provider_id: str) -> ProviderConfig:
        provider = self._providers.get(provider_id)
        if provider is None:
            raise ConfigurationError(f"Unknown provider '{provider_id}'")
        return provider
