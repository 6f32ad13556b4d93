from __future__ import annotations

import asyncio
import json

import httpx

from llm_gateway.configs.store import InMemoryConfigStore
from llm_gateway.gateway.request_builder import build_request
from llm_gateway.gateway.service import GatewayService
from llm_gateway.gateway.transport import HttpxTransport
from tests.gateway._fakes import gemini_body, make_configuration


def _service(handler, *, chunk_size: int = 16) -> GatewayService:
    transport = HttpxTransport(timeout_seconds=5.0, transport=httpx.MockTransport(handler))
    return GatewayService(
        store=InMemoryConfigStore([make_configuration(api_key="k-123", model_name="gem")]),
        transport=transport,
        default_config_name="default",
        chunk_size=chunk_size,
    )


def test_wire_request_matches_provider_contract() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=gemini_body("Paris"))

    result = asyncio.run(_service(handler).generate_text('Capital of "France"?'))

    assert result == "Paris"
    [request] = seen
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gem:generateContent"
    assert request.url.params["key"] == "k-123"
    assert request.headers["content-type"] == "application/json"
    assert request.headers["content-length"] == str(len(request.content))
    assert json.loads(request.content) == {
        "contents": [{"parts": [{"text": 'Capital of "France"?'}]}]
    }


def test_error_status_surfaces_reason_phrase() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, content=b'{"error": "quota"}')

    assert asyncio.run(_service(handler).generate_text("hi")) == "ERROR: Too Many Requests"


def test_plain_text_body_is_returned_raw() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"oops")

    assert asyncio.run(_service(handler).generate_text("hi")) == "oops"


def test_connection_failure_becomes_error_result() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = asyncio.run(_service(handler).generate_text("hi"))

    assert result == "ERROR: Provider request failed (ConnectError: connection refused)"


def test_timeout_becomes_error_result() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    assert asyncio.run(_service(handler).generate_text("hi")) == "ERROR: Provider request timed out"


def test_large_body_is_read_in_bounded_chunks() -> None:
    text = "lorem ipsum " * 500

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=gemini_body(text))

    lines: list[str] = []
    result = asyncio.run(
        _service(handler, chunk_size=64).generate_text("hi", debug=True, sink=lines.append)
    )

    assert result == text
    chunk_lines = [line for line in lines if line.startswith("chunk ")]
    assert len(chunk_lines) > 10
    assert all(": 64 bytes" in line for line in chunk_lines[:-1])


def test_response_handle_reports_end_of_data_with_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"x" * 40)

    async def run() -> list[bytes | None]:
        transport = HttpxTransport(timeout_seconds=5.0, transport=httpx.MockTransport(handler))
        handle = transport.open(build_request(prompt="p", configuration=make_configuration()))
        try:
            response = await handle.send()
            try:
                reads = [await response.read_chunk(16) for _ in range(4)]
            finally:
                await response.aclose()
        finally:
            await handle.aclose()
        return reads

    assert asyncio.run(run()) == [b"x" * 16, b"x" * 16, b"x" * 8, None]
