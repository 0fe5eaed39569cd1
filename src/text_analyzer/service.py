"""Analysis facade: provider dispatch, retries, and result normalization."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from text_analyzer.analysis.parser import ResultParser
from text_analyzer.clients.transport import HttpxTransport, Transport
from text_analyzer.config import AppConfig, RetryConfig
from text_analyzer.errors import AnalyzerError, ConfigurationError, NetworkError, TransportError
from text_analyzer.models.analysis import AnalysisResult
from text_analyzer.models.provider import ProviderConfig
from text_analyzer.prompts import CANARY_PROMPT, CONFIRMATION_PHRASE, build_analysis_prompt
from text_analyzer.providers import ProviderRequest, build_request, extract_text
from text_analyzer.registry import ProviderRegistry
from text_analyzer.utils.ids import new_id

logger = logging.getLogger(__name__)


def is_retryable(exc: BaseException) -> bool:
    """Network failures and 5xx responses are retried; 4xx and config errors are not."""
    if isinstance(exc, NetworkError):
        return True
    if isinstance(exc, TransportError):
        return exc.retryable
    return False


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Provider call attempt %d failed (%s), retrying",
        retry_state.attempt_number,
        exc,
    )


class AnalysisService:
    """Sends text to a configured provider and returns a normalized AnalysisResult.

    Holds no per-call state, so one instance can serve concurrent calls.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        id_factory: Callable[[], str] = new_id,
        retry: RetryConfig | None = None,
        max_text_chars: int = 20000,
    ):
        self.transport = transport or HttpxTransport()
        self.parser = ResultParser(id_factory=id_factory)
        self.retry = retry or RetryConfig()
        self.max_text_chars = max_text_chars

    @classmethod
    def from_config(cls, config: AppConfig, transport: Transport | None = None) -> AnalysisService:
        return cls(
            transport,
            retry=config.retry,
            max_text_chars=config.analysis.max_text_chars,
        )

    async def analyze(self, text: str, provider: ProviderConfig | None) -> AnalysisResult:
        """Analyze ``text`` with ``provider``.

        Raises ConfigurationError, UnsupportedProviderType, NetworkError or
        TransportError. Undecodable model output never raises; it yields the
        fallback analysis instead.
        """
        if provider is None:
            raise ConfigurationError(
                "No active AI provider found. Please configure an AI provider first."
            )
        if not provider.enabled:
            raise ConfigurationError(f"Provider '{provider.id}' is disabled")

        content = text
        if len(content) > self.max_text_chars:
            logger.warning(
                "Text of %d chars truncated to %d before analysis",
                len(content),
                self.max_text_chars,
            )
            content = content[: self.max_text_chars]

        request = build_request(provider, build_analysis_prompt(content))
        logger.info(
            "Analyzing %d chars with provider=%s kind=%s model=%s",
            len(content),
            provider.id,
            provider.kind,
            provider.model,
        )
        try:
            envelope = await self._post_with_retry(provider, request)
        except AnalyzerError:
            logger.error("AI analysis failed for provider %s", provider.id, exc_info=True)
            raise

        raw_text = extract_text(provider.kind, envelope)
        return self.parser.parse(text, raw_text)

    async def analyze_active(self, text: str, registry: ProviderRegistry) -> AnalysisResult:
        return await self.analyze(text, registry.active())

    async def test_connection(self, provider: ProviderConfig | None) -> bool:
        """Send the canary prompt once. Never raises."""
        if provider is None:
            return False
        try:
            request = build_request(provider, CANARY_PROMPT)
            envelope = await self._post_once(provider, request)
            text = extract_text(provider.kind, envelope)
        except Exception as exc:
            logger.warning("Connection test failed for provider %s: %s", provider.id, exc)
            return False
        return CONFIRMATION_PHRASE in text.lower() or len(text) > 0

    async def _post_with_retry(self, provider: ProviderConfig, request: ProviderRequest) -> dict:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(provider.tuning.retry_attempts + 1),
            wait=wait_exponential(
                min=self.retry.backoff_min_seconds,
                max=self.retry.backoff_max_seconds,
            ),
            retry=retry_if_exception(is_retryable),
            before_sleep=_log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                envelope = await self._post_once(provider, request)
        return envelope

    async def _post_once(self, provider: ProviderConfig, request: ProviderRequest) -> dict:
        timeout = provider.tuning.timeout_seconds
        try:
            return await asyncio.wait_for(self.transport.post(request, timeout=timeout), timeout)
        except asyncio.TimeoutError as exc:
            raise NetworkError(
                f"Provider '{provider.id}' did not respond within {provider.tuning.timeout_ms} ms",
                cause=exc,
            ) from exc
