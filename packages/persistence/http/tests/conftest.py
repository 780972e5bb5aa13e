"""Shared fixtures for the HTTP persistence tests."""

from __future__ import annotations

from collections import deque
from typing import Any

import pytest

from rest_ddd_persistence_http import (
    HttpAdapter,
    HttpConfig,
    RawResponse,
    RequestDescriptor,
)


class RecordingTransport:
    """In-memory transport: records requests and replays queued responses."""

    def __init__(self) -> None:
        self.requests: list[RequestDescriptor] = []
        self._responses: deque[RawResponse] = deque()

    def queue(self, body: Any = None, status: int = 200) -> RecordingTransport:
        self._responses.append(RawResponse(status=status, body=body))
        return self

    async def submit(self, request: RequestDescriptor) -> RawResponse:
        self.requests.append(request)
        if self._responses:
            return self._responses.popleft()
        return RawResponse(status=200, body=None)

    @property
    def last(self) -> RequestDescriptor:
        return self.requests[-1]


@pytest.fixture
def config() -> HttpConfig:
    return HttpConfig(host="api.local", protocol="http")


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def adapter(config: HttpConfig, transport: RecordingTransport) -> HttpAdapter:
    return HttpAdapter(config, transport)
