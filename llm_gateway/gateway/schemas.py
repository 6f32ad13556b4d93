from __future__ import annotations

from pydantic import BaseModel, Field

from llm_gateway.gateway.types import CallOutcome


class GenerateIn(BaseModel):
    prompt: str = Field(
        min_length=1,
        description="Prompt text forwarded verbatim to the provider.",
        examples=["What is the capital of France?"],
    )
    debug: bool = Field(
        default=False,
        description="Return a step-by-step trace of the call alongside the result.",
    )
    config_name: str | None = Field(
        default=None,
        min_length=1,
        max_length=128,
        description="Configuration to use. Omit for the default configuration.",
        examples=["default"],
    )


class GenerateOut(BaseModel):
    result: str = Field(
        description=(
            "Generated text, the raw provider body when the text could not be extracted, "
            "or a message prefixed with `ERROR: `."
        ),
        examples=["Paris"],
    )
    outcome: CallOutcome = Field(
        description="text | raw_body | http_error | fault",
        examples=["text"],
    )
    config_name: str
    trace: list[str] | None = Field(
        default=None,
        description="Diagnostic lines, present only when `debug` was requested.",
    )
