from __future__ import annotations

import logging
from collections.abc import Callable

DiagnosticSink = Callable[[str], None]

debug_logger = logging.getLogger("llm_gateway.gateway.debug")
logger = logging.getLogger("llm_gateway.gateway")


def _log_line(line: str) -> None:
    debug_logger.info(line)


class Diagnostics:
    """
    Per-call narration of the gateway pipeline.

    Silent unless the caller asked for debug output. Lines go to `sink` when one is
    injected, otherwise to the `llm_gateway.gateway.debug` logger. A failing sink is
    reported once on the operational logger and otherwise ignored, so narration can
    never change the call's result.
    """

    def __init__(self, *, enabled: bool, sink: DiagnosticSink | None = None):
        self.enabled = enabled
        self._sink = sink or _log_line
        self._sink_failed = False

    def emit(self, line: str) -> None:
        if not self.enabled or self._sink_failed:
            return
        try:
            self._sink(line)
        except Exception:  # noqa: BLE001 - diagnostics must not affect the call
            self._sink_failed = True
            logger.warning("Diagnostic sink failed; further debug lines dropped", exc_info=True)
