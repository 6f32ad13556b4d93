"""Transport seam between the gateway pipeline and an HTTP client.

The pipeline opens a request handle, sends it to obtain a response handle, reads
the body chunk by chunk and finally closes both handles. `read_chunk` returns
`None` once the body is exhausted; running out of data is not an error.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

import httpx

from llm_gateway.domain.exceptions import TransportError
from llm_gateway.gateway.types import CallRequest


class ResponseHandle(Protocol):
    @property
    def status_code(self) -> int: ...

    @property
    def reason_phrase(self) -> str: ...

    async def read_chunk(self, max_bytes: int) -> bytes | None: ...

    async def aclose(self) -> None: ...


class RequestHandle(Protocol):
    async def send(self) -> ResponseHandle: ...

    async def aclose(self) -> None: ...


class Transport(Protocol):
    def open(self, call_request: CallRequest) -> RequestHandle: ...


def _describe_httpx_error(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return "Provider request timed out"
    detail = str(exc)
    if detail:
        return f"Provider request failed ({type(exc).__name__}: {detail})"
    return f"Provider request failed ({type(exc).__name__})"


class HttpxResponseHandle:
    def __init__(self, *, response: httpx.Response):
        self._response = response
        self._chunks: AsyncIterator[bytes] | None = None

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason_phrase(self) -> str:
        return self._response.reason_phrase

    async def read_chunk(self, max_bytes: int) -> bytes | None:
        if self._chunks is None:
            self._chunks = self._response.aiter_bytes(chunk_size=max_bytes)
        try:
            return await anext(self._chunks, None)
        except httpx.HTTPError as exc:
            raise TransportError(_describe_httpx_error(exc)) from exc

    async def aclose(self) -> None:
        await self._response.aclose()


class HttpxRequestHandle:
    """Owns the per-call `httpx.AsyncClient` (and therefore its connection pool)."""

    def __init__(self, *, client: httpx.AsyncClient, request: httpx.Request):
        self._client = client
        self._request = request

    async def send(self) -> HttpxResponseHandle:
        try:
            response = await self._client.send(self._request, stream=True)
        except httpx.HTTPError as exc:
            raise TransportError(_describe_httpx_error(exc)) from exc
        return HttpxResponseHandle(response=response)

    async def aclose(self) -> None:
        await self._client.aclose()


class HttpxTransport:
    """
    Default transport: one `httpx.AsyncClient` per call, streamed responses.

    `transport` lets tests (or proxies) plug in an `httpx.AsyncBaseTransport` such as
    `httpx.MockTransport`.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def open(self, call_request: CallRequest) -> HttpxRequestHandle:
        timeout = httpx.Timeout(self._timeout_seconds)
        # Build the request before the client exists so a malformed URL cannot leak a client.
        request = httpx.Request(
            call_request.method,
            call_request.url,
            headers=call_request.headers,
            content=call_request.body,
            extensions={"timeout": timeout.as_dict()},
        )
        client = httpx.AsyncClient(timeout=timeout, transport=self._transport)
        return HttpxRequestHandle(client=client, request=request)
