"""Tests for HttpxTransport against httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from text_analyzer.clients.transport import HttpxTransport
from text_analyzer.errors import NetworkError, TransportError
from text_analyzer.providers.base import ProviderRequest

REQUEST = ProviderRequest(
    url="https://llm.example.com/v1/chat",
    headers={"Content-Type": "application/json", "Authorization": "Bearer sk-test"},
    body={"model": "m", "prompt": "hi", "max_tokens": 1000},
)


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestHttpxTransport:
    async def test_posts_json_body_and_headers(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"response": "ok"})

        envelope = await _transport(handler).post(REQUEST)

        assert envelope == {"response": "ok"}
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == REQUEST.url
        assert request.headers["Authorization"] == "Bearer sk-test"
        assert json.loads(request.content) == REQUEST.body

    async def test_non_2xx_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="upstream overloaded")

        with pytest.raises(TransportError) as exc_info:
            await _transport(handler).post(REQUEST)

        assert exc_info.value.status == 503
        assert exc_info.value.body == "upstream overloaded"
        assert exc_info.value.retryable

    async def test_client_error_not_retryable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "invalid key"})

        with pytest.raises(TransportError) as exc_info:
            await _transport(handler).post(REQUEST)
        assert exc_info.value.status == 401
        assert "invalid key" in exc_info.value.body
        assert not exc_info.value.retryable

    async def test_connection_failure_raises_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError, match="failed") as exc_info:
            await _transport(handler).post(REQUEST)
        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    async def test_timeout_raises_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(NetworkError, match="timed out"):
            await _transport(handler).post(REQUEST, timeout=1.0)

    @pytest.mark.parametrize("body", ["not json at all", "[1, 2, 3]", '"text"'])
    async def test_non_object_body_degrades_to_empty_envelope(self, body):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text=body)

        assert await _transport(handler).post(REQUEST) == {}

    async def test_owns_client_when_none_given(self, monkeypatch):
        created: list[httpx.AsyncClient] = []
        real_client = httpx.AsyncClient

        def factory(*args, **kwargs):
            client = real_client(
                transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"text": "hi"}))
            )
            created.append(client)
            return client

        monkeypatch.setattr(httpx, "AsyncClient", factory)

        envelope = await HttpxTransport().post(REQUEST)

        assert envelope == {"text": "hi"}
        assert created and created[0].is_closed
