"""Exception hierarchy for provider dispatch."""

from __future__ import annotations


class AnalyzerError(Exception):
    """Base class for errors surfaced to callers of the analysis service."""


class ConfigurationError(AnalyzerError):
    """No usable provider, or a provider record that cannot be dispatched."""


class UnsupportedProviderType(AnalyzerError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Unsupported provider type: {kind}")
        self.kind = kind


class NetworkError(AnalyzerError):
    """Connection-level failure: DNS, refused connection, timeout."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class TransportError(AnalyzerError):
    """The provider answered with a non-2xx status."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"API request failed: {status} {body[:200]}".rstrip())
        self.status = status
        self.body = body

    @property
    def retryable(self) -> bool:
        return self.status >= 500


class ResponseDecodeError(ValueError):
    """Model text could not be decoded as an analysis result.

    Never leaves the parser: it is always recovered by the fallback analyzer.
    """
