from __future__ import annotations

from llm_gateway.gateway.diagnostics import Diagnostics
from llm_gateway.gateway.transport import ResponseHandle
from llm_gateway.gateway.types import CallResponse


async def assemble_response(
    *,
    response: ResponseHandle,
    chunk_size: int,
    diagnostics: Diagnostics,
) -> CallResponse:
    """
    Read the response body to completion.

    Chunks are at most `chunk_size` bytes. The loop ends when the handle reports end of
    data (`None`); empty chunks are skipped rather than treated as the end. There is
    no cap on the total body size.
    """

    buffer = bytearray()
    chunks_read = 0
    while True:
        chunk = await response.read_chunk(chunk_size)
        if chunk is None:
            break
        if not chunk:
            continue
        chunks_read += 1
        buffer.extend(chunk)
        diagnostics.emit(f"chunk {chunks_read} read: {len(chunk)} bytes ({len(buffer)} total)")

    diagnostics.emit(f"response body complete: {len(buffer)} bytes in {chunks_read} chunk(s)")
    return CallResponse(
        status_code=response.status_code,
        reason_phrase=response.reason_phrase,
        body=bytes(buffer),
        chunks_read=chunks_read,
    )
