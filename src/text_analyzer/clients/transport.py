"""HTTP transport for provider requests, built on httpx."""

from __future__ import annotations

import json
import logging
from typing import Protocol

import httpx

from text_analyzer.errors import NetworkError, TransportError
from text_analyzer.providers.base import ProviderRequest

logger = logging.getLogger(__name__)


class Transport(Protocol):
    async def post(self, request: ProviderRequest, timeout: float | None = None) -> dict:
        """POST the request and return the decoded JSON envelope."""
        ...


class HttpxTransport:
    """Async POST via httpx. No retries: callers own the retry policy."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client

    async def post(self, request: ProviderRequest, timeout: float | None = None) -> dict:
        if self._client is not None:
            return await self._send(self._client, request, timeout)
        async with httpx.AsyncClient() as client:
            return await self._send(client, request, timeout)

    async def _send(
        self,
        client: httpx.AsyncClient,
        request: ProviderRequest,
        timeout: float | None,
    ) -> dict:
        logger.debug("POST %s", request.url)
        try:
            response = await client.post(
                request.url,
                headers=request.headers,
                json=request.body,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Request to {request.url} timed out", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Request to {request.url} failed: {exc}", cause=exc) from exc

        if not response.is_success:
            raise TransportError(status=response.status_code, body=response.text)

        return _decode_envelope(response.text)


def _decode_envelope(body: str) -> dict:
    """Decode a 2xx body; anything but a JSON object degrades to an empty envelope."""
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        logger.warning("Provider returned a non-JSON body (%d chars)", len(body))
        return {}
    if not isinstance(parsed, dict):
        return {}
    return parsed
