"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from text_analyzer.models.provider import ProviderConfig


@dataclass(frozen=True)
class RetryConfig:
    backoff_min_seconds: float = 1.0
    backoff_max_seconds: float = 10.0

    def __post_init__(self) -> None:
        if self.backoff_min_seconds < 0:
            raise ValueError("backoff_min_seconds must be >= 0")
        if self.backoff_max_seconds < self.backoff_min_seconds:
            raise ValueError("backoff_max_seconds must be >= backoff_min_seconds")


@dataclass(frozen=True)
class AnalysisConfig:
    max_text_chars: int = 20000

    def __post_init__(self) -> None:
        if self.max_text_chars < 1:
            raise ValueError("max_text_chars must be >= 1")


@dataclass(frozen=True)
class AppConfig:
    retry: RetryConfig = field(default_factory=RetryConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    providers: tuple[ProviderConfig, ...] = ()
    active: str | None = None


def load_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidate = Path.cwd() / "config.yaml"
        if candidate.exists():
            path = candidate

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    env = os.environ if env is None else env
    providers = tuple(_provider_from_raw(entry, env) for entry in raw.get("providers") or [])
    active = raw.get("active")
    if active is not None and active not in {p.id for p in providers}:
        raise ValueError(f"active provider '{active}' is not configured")

    return AppConfig(
        retry=_section(RetryConfig, raw, "retry"),
        analysis=_section(AnalysisConfig, raw, "analysis"),
        providers=providers,
        active=active,
    )


def _provider_from_raw(entry: dict, env: Mapping[str, str]) -> ProviderConfig:
    entry = dict(entry)
    key_env = entry.pop("api_key_env", None)
    if not entry.get("api_key") and key_env:
        entry["api_key"] = env.get(key_env, "")
    return ProviderConfig.model_validate(entry)


def _section(cls, raw: dict, name: str):
    values = raw.get(name) or {}
    if not isinstance(values, dict):
        raise ValueError(f"{name} section must be a mapping")
    try:
        return cls(**values)
    except TypeError as exc:
        raise ValueError(f"{name} section: {exc}") from exc
