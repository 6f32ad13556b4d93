from __future__ import annotations

import json
from typing import Any

from llm_gateway.gateway.types import CallResponse, CallResult

# candidates[0].content.parts[0].text
EXTRACTION_PATH: tuple[str | int, ...] = ("candidates", 0, "content", "parts", 0, "text")


def extract_generated_text(raw: str) -> str | None:
    """Return the string at `EXTRACTION_PATH`, or None when the body doesn't have one."""

    try:
        node: Any = json.loads(raw)
    except ValueError:
        return None

    for step in EXTRACTION_PATH:
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                return None
        elif not isinstance(node, dict) or step not in node:
            return None
        node = node[step]

    return node if isinstance(node, str) else None


def extract_result(response: CallResponse) -> CallResult:
    """
    Turn an assembled response into a call result.

    Non-200 responses report the reason phrase without looking at the body. A 200 whose
    body lacks the expected path falls back to the raw body instead of failing, so
    callers cannot tell generated text from an unparseable payload by the string alone;
    `CallResult.outcome` keeps the distinction.
    """

    if response.status_code != 200:
        return CallResult.http_error(response.reason_phrase or f"HTTP {response.status_code}")

    raw = response.body.decode("utf-8", errors="replace")
    text = extract_generated_text(raw)
    if text is None:
        return CallResult.raw_body(raw)
    return CallResult.generated(text)
