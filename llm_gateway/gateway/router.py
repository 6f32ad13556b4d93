from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from llm_gateway.core.settings import get_settings
from llm_gateway.domain.exceptions import BusinessValidationError
from llm_gateway.gateway.deps import get_gateway_service
from llm_gateway.gateway.schemas import GenerateIn, GenerateOut
from llm_gateway.gateway.service import GatewayService

router = APIRouter(tags=["gateway"])


@router.post("/generate", response_model=GenerateOut)
async def generate(
    payload: GenerateIn,
    request: Request,
    service: GatewayService = Depends(get_gateway_service),
) -> GenerateOut:
    """
    Forward a prompt to the configured provider and return the generated text.

    Provider and pipeline failures are reported in-band (`ERROR: ...` result with a
    200 status) so callers see a single contract regardless of what went wrong.
    """

    settings = get_settings()
    if len(payload.prompt) > settings.gateway_max_prompt_chars:
        raise BusinessValidationError(
            f"prompt must be {settings.gateway_max_prompt_chars} characters or fewer."
        )

    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")
    trace: list[str] = []
    result = await service.call(
        payload.prompt,
        debug=payload.debug,
        config_name=payload.config_name,
        sink=trace.append if payload.debug else None,
        request_id=request_id,
    )

    return GenerateOut(
        result=result.as_text(),
        outcome=result.outcome,
        config_name=service.config_name_for(payload.config_name),
        trace=trace if payload.debug else None,
    )
