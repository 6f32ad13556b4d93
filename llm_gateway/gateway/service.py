"""The gateway call pipeline.

resolve configuration -> build request -> send -> assemble body -> extract text

Every call produces a `CallResult`; nothing raised inside the pipeline reaches the
caller. Request and response handles are closed exactly once on every path.

IMPORTANT: the operational logger records metadata only (configuration name,
outcome, status, duration). Prompts, generated text and API keys are never logged;
the opt-in debug narration redacts the key.
"""

from __future__ import annotations

import logging
import time

from llm_gateway.configs.store import ConfigStore
from llm_gateway.core.metrics import record_gateway_call
from llm_gateway.domain.exceptions import GatewayError
from llm_gateway.gateway.assembler import assemble_response
from llm_gateway.gateway.diagnostics import DiagnosticSink, Diagnostics
from llm_gateway.gateway.extractor import extract_result
from llm_gateway.gateway.request_builder import build_request, redact_url
from llm_gateway.gateway.transport import RequestHandle, ResponseHandle, Transport
from llm_gateway.gateway.types import CallResult

logger = logging.getLogger("llm_gateway.gateway")


def describe_fault(exc: BaseException) -> str:
    if isinstance(exc, GatewayError):
        return str(exc) or type(exc).__name__
    detail = str(exc)
    return f"{type(exc).__name__}: {detail}" if detail else type(exc).__name__


async def _release(
    handle: RequestHandle | ResponseHandle | None,
    *,
    label: str,
    diagnostics: Diagnostics,
) -> None:
    if handle is None:
        return
    try:
        await handle.aclose()
    except Exception as exc:  # noqa: BLE001 - a failed close must not replace the result
        diagnostics.emit(f"{label} handle close failed: {describe_fault(exc)}")
        logger.warning("Failed to close transport handle", extra={"handle": label}, exc_info=True)
        return
    diagnostics.emit(f"{label} handle closed")


class GatewayService:
    def __init__(
        self,
        *,
        store: ConfigStore,
        transport: Transport,
        default_config_name: str,
        chunk_size: int,
    ):
        self._store = store
        self._transport = transport
        self._default_config_name = default_config_name
        self._chunk_size = chunk_size

    def config_name_for(self, config_name: str | None) -> str:
        return self._default_config_name if config_name is None else config_name

    async def call(
        self,
        prompt: str,
        *,
        debug: bool = False,
        config_name: str | None = None,
        sink: DiagnosticSink | None = None,
        request_id: str | None = None,
    ) -> CallResult:
        name = self.config_name_for(config_name)
        diagnostics = Diagnostics(enabled=debug, sink=sink)
        started = time.perf_counter()
        request_handle: RequestHandle | None = None
        response_handle: ResponseHandle | None = None

        try:
            diagnostics.emit(f"call started: config={name!r} prompt_chars={len(prompt)}")

            configuration = await self._store.resolve(name)
            diagnostics.emit(f"configuration resolved: model={configuration.model_name!r}")

            call_request = build_request(prompt=prompt, configuration=configuration)
            diagnostics.emit(
                f"request built: {call_request.method} {redact_url(call_request.url)} "
                f"content_length={call_request.headers['Content-Length']}"
            )

            request_handle = self._transport.open(call_request)
            diagnostics.emit("request sent")
            response_handle = await request_handle.send()
            diagnostics.emit(
                f"response received: {response_handle.status_code} "
                f"{response_handle.reason_phrase}"
            )

            response = await assemble_response(
                response=response_handle,
                chunk_size=self._chunk_size,
                diagnostics=diagnostics,
            )
            result = extract_result(response)
            diagnostics.emit(f"extraction outcome: {result.outcome} ({len(result.text)} chars)")
        except Exception as exc:  # noqa: BLE001 - callers always receive a result
            description = describe_fault(exc)
            diagnostics.emit(f"fault: {description}")
            logger.warning(
                "Gateway call failed",
                extra={"request_id": request_id, "config_name": name, "outcome": "fault"},
                # Expected faults carry a readable message; anything else gets a stack trace.
                exc_info=not isinstance(exc, GatewayError),
            )
            result = CallResult.fault(description)
        finally:
            await _release(request_handle, label="request", diagnostics=diagnostics)
            await _release(response_handle, label="response", diagnostics=diagnostics)

        duration = time.perf_counter() - started
        record_gateway_call(outcome=result.outcome, duration_seconds=duration)
        logger.info(
            "Gateway call completed",
            extra={
                "request_id": request_id,
                "config_name": name,
                "outcome": result.outcome,
                "duration_ms": round(duration * 1000.0, 2),
            },
        )
        return result

    async def generate_text(
        self,
        prompt: str,
        *,
        debug: bool = False,
        config_name: str | None = None,
        sink: DiagnosticSink | None = None,
    ) -> str:
        """Run one call and flatten it: text, raw body, or an `ERROR: ` prefixed message."""

        result = await self.call(prompt, debug=debug, config_name=config_name, sink=sink)
        return result.as_text()
