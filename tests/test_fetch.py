"""Tests for fetching the upstream script."""

from __future__ import annotations

import httpx
import pytest

from userjs_updater.errors import NetworkError
from userjs_updater.fetch import fetch_script


URL = "https://example.invalid/user.js"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_returns_text():
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == URL
        return httpx.Response(200, text="/******\n* name: ghacks user.js\n")

    async with _client(handler) as client:
        text = await fetch_script(URL, client=client)
    assert text.startswith("/******")


async def test_error_status():
    async with _client(lambda request: httpx.Response(404)) as client:
        with pytest.raises(NetworkError, match="HTTP 404"):
            await fetch_script(URL, client=client)


async def test_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(NetworkError, match="connection refused"):
            await fetch_script(URL, client=client)
