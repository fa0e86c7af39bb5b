"""HTTP transport boundary.

The transport is an injected collaborator: any async callable taking a URL
and a :class:`TransportRequest` and returning a :class:`TransportResponse`
(or raising).  :func:`fetch_text` is the one place transport faults are
caught and turned into ``fetchError`` / ``httpError`` values.

No timeout, retry or cancellation handling happens here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import httpx

from typedrpc.domain.errors import FetchError, HttpError, describe_fault
from typedrpc.domain.result import Err, Ok, Result

logger = logging.getLogger(__name__)

JSON_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class TransportRequest:
    """Outbound request description."""

    method: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None


@dataclass(frozen=True)
class TransportResponse:
    """Inbound response as plain data."""

    status: int
    status_text: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class Transport(Protocol):
    """Perform one request. Raising signals a transport-level failure."""

    async def __call__(self, url: str, request: TransportRequest) -> TransportResponse: ...


class HttpxTransport:
    """Default transport backed by ``httpx.AsyncClient``.

    Pass a *client* to reuse a connection pool; otherwise a short-lived
    client is opened per request.  The client timeout is disabled.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client

    async def __call__(self, url: str, request: TransportRequest) -> TransportResponse:
        if self._client is not None:
            return await self._send(self._client, url, request)
        async with httpx.AsyncClient(timeout=None) as client:
            return await self._send(client, url, request)

    @staticmethod
    async def _send(
        client: httpx.AsyncClient, url: str, request: TransportRequest
    ) -> TransportResponse:
        response = await client.request(
            request.method,
            url,
            headers=request.headers,
            content=request.body,
            timeout=None,
        )
        return TransportResponse(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=dict(response.headers),
            body=response.text,
        )


async def fetch_text(
    transport: Transport, url: str, body: str | None = None
) -> Result[str, FetchError | HttpError]:
    """Send *body* to *url* and return the response text.

    POST when a body is given, GET otherwise.
    """
    request = TransportRequest(
        method="POST" if body else "GET",
        headers=dict(JSON_HEADERS),
        body=body,
    )
    try:
        response = await transport(url, request)
    except Exception as exc:
        logger.debug("transport.failed", extra={"url": url}, exc_info=True)
        return Err(FetchError(message=f"Fetch failed: {describe_fault(exc)}"))

    if not response.ok:
        return Err(HttpError(message=f"HTTP error {response.status}: {response.status_text}"))
    return Ok(response.body)
