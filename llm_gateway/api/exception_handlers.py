from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from llm_gateway.domain.exceptions import BusinessValidationError, ConfigNotFoundError

logger = logging.getLogger("llm_gateway.errors")


def _request_meta(request: Request, *, status_code: int, error: str) -> dict[str, object]:
    return {
        "request_id": getattr(request.state, "request_id", None)
        or request.headers.get("X-Request-ID"),
        "http_method": request.method,
        "request_path": request.url.path,  # no query string
        "status_code": status_code,
        "error": error,
    }


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(BusinessValidationError)
    async def handle_business_validation_error(
        request: Request,
        exc: BusinessValidationError,
    ) -> JSONResponse:
        logger.info(
            "Business validation failed",
            extra=_request_meta(request, status_code=400, error="business_validation"),
        )
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(ConfigNotFoundError)
    async def handle_config_not_found(
        request: Request,
        exc: ConfigNotFoundError,
    ) -> JSONResponse:
        logger.info(
            "Configuration not found",
            extra=_request_meta(request, status_code=404, error="config_not_found"),
        )
        return JSONResponse(status_code=404, content={"detail": str(exc)})
