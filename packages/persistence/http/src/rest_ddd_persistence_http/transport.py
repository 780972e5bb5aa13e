"""Transport port and the default httpx implementation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from rest_ddd_core.correlation import get_causation_id, get_correlation_id
from rest_ddd_core.primitives.exceptions import BackendConnectionError

from .parser import RawResponse

if TYPE_CHECKING:
    from .config import HttpConfig
    from .request import RequestDescriptor

logger = logging.getLogger("rest_ddd.http")


@runtime_checkable
class ITransport(Protocol):
    """Sends one rendered request and returns the decoded response."""

    async def submit(self, request: RequestDescriptor) -> RawResponse: ...


def decode_body(response: httpx.Response) -> Any:
    """JSON when the body parses as JSON, text otherwise, ``None`` when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpxTransport(ITransport):
    """
    Transport over ``httpx.AsyncClient``.

    Requests carry correlation headers for distributed tracing. A client
    passed in stays owned by the caller; otherwise one is created on first
    use and closed by :meth:`aclose`. Requests are never retried.
    """

    def __init__(
        self,
        config: HttpConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._client

    async def submit(self, request: RequestDescriptor) -> RawResponse:
        headers = dict(request.headers)
        correlation_id = get_correlation_id()
        if correlation_id:
            headers.setdefault("X-Correlation-ID", correlation_id)
        causation_id = get_causation_id()
        if causation_id:
            headers.setdefault("X-Causation-ID", causation_id)

        try:
            response = await self.client.request(
                request.method,
                request.url,
                content=request.body,
                headers=headers,
            )
        except httpx.TransportError as e:
            logger.warning(
                "%s %s failed: %s", request.method, request.url, e.__class__.__name__
            )
            raise BackendConnectionError(
                f"{request.method} {request.url} failed: {e}"
            ) from e

        return RawResponse(
            status=response.status_code,
            body=decode_body(response),
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
