from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ERROR_PREFIX = "ERROR: "

CallOutcome = Literal["text", "raw_body", "http_error", "fault"]


@dataclass(frozen=True)
class CallRequest:
    """One outbound provider request. Built fresh per call."""

    prompt: str
    url: str = field(repr=False)  # carries the API key as a query parameter
    body: bytes
    headers: dict[str, str]
    method: str = "POST"


@dataclass(frozen=True)
class CallResponse:
    status_code: int
    reason_phrase: str
    body: bytes
    chunks_read: int


@dataclass(frozen=True)
class CallResult:
    """
    Typed outcome of a gateway call.

    `text` holds the generated text, the raw body, the provider's reason phrase or
    a fault description depending on `outcome`. `as_text()` flattens it into the
    single-string contract exposed to callers.
    """

    outcome: CallOutcome
    text: str

    @classmethod
    def generated(cls, text: str) -> CallResult:
        return cls(outcome="text", text=text)

    @classmethod
    def raw_body(cls, body: str) -> CallResult:
        return cls(outcome="raw_body", text=body)

    @classmethod
    def http_error(cls, reason_phrase: str) -> CallResult:
        return cls(outcome="http_error", text=reason_phrase)

    @classmethod
    def fault(cls, description: str) -> CallResult:
        return cls(outcome="fault", text=description)

    @property
    def is_error(self) -> bool:
        return self.outcome in ("http_error", "fault")

    def as_text(self) -> str:
        if self.is_error:
            return f"{ERROR_PREFIX}{self.text}"
        return self.text
