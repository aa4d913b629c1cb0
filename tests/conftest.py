"""Shared test fixtures for SDK tests."""

from __future__ import annotations

import json
from collections import deque
from typing import Any

import httpx
import pytest

from matrix_sdk.client import Client
from matrix_sdk.http import HTTPClient

BASE_URL = "https://matrix.test"


class RecordingTransport(httpx.AsyncBaseTransport):
    """Records requests and replays scripted responses in order.

    Once the script runs out, ``default`` is returned. A scripted entry may
    be an exception instance, which is raised instead of responding.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.script: deque[Any] = deque()
        self.default: tuple[int, Any] = (200, {})

    def push(self, status: int, body: Any = None, headers: dict[str, str] | None = None) -> None:
        self.script.append((status, {} if body is None else body, headers))

    def push_sync(self, next_batch: str, **sections: Any) -> None:
        self.push(200, {"next_batch": next_batch, **sections})

    def push_error(self, exc: Exception) -> None:
        self.script.append(exc)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        body = None
        if request.content:
            try:
                body = json.loads(request.content)
            except Exception:
                body = request.content
        self.calls.append({
            "method": request.method,
            "url": str(request.url),
            "path": request.url.path,
            "params": dict(request.url.params),
            "headers": dict(request.headers),
            "body": body,
        })
        entry = self.script.popleft() if self.script else (*self.default, None)
        if isinstance(entry, Exception):
            raise entry
        status, payload, headers = entry
        if isinstance(payload, str):
            return httpx.Response(status, text=payload, headers=headers)
        return httpx.Response(status, json=payload, headers=headers)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def http_client(transport):
    """HTTPClient with a mock transport."""
    client = HTTPClient(BASE_URL, token="test-token")
    # Replace the inner httpx client with one using our mock transport
    client._client = httpx.AsyncClient(base_url=BASE_URL, transport=transport)
    return client


def make_client(transport: RecordingTransport, **kwargs: Any) -> Client:
    client = Client(BASE_URL, token="test-token", user_id="@me:matrix.test", **kwargs)
    client.http._client = httpx.AsyncClient(base_url=BASE_URL, transport=transport)
    return client


@pytest.fixture
def client(transport):
    return make_client(transport)


@pytest.fixture
def sleeps(monkeypatch):
    """Record asyncio.sleep delays instead of sleeping."""
    import asyncio

    delays: list[float] = []

    async def recording_sleep(delay, *args, **kwargs):
        delays.append(delay)

    monkeypatch.setattr(asyncio, "sleep", recording_sleep)
    return delays
