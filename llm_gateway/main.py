from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from llm_gateway.api.exception_handlers import register_exception_handlers
from llm_gateway.api.schemas import HealthOut
from llm_gateway.configs.router import router as configurations_router
from llm_gateway.core.db import close_db, init_db
from llm_gateway.core.logging import setup_logging
from llm_gateway.core.metrics import PrometheusMetricsMiddleware, metrics_router
from llm_gateway.core.middleware.http_logging import HttpLoggingMiddleware
from llm_gateway.core.settings import get_settings
from llm_gateway.gateway.router import router as gateway_router

setup_logging()


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Defer settings/env access until application startup so importing the app
        # (e.g. during pytest collection) does not require DATABASE_URL.
        settings = get_settings()
        init_db(app=app, database_url=str(settings.database_url))
        yield
        await close_db(app=app)

    app = FastAPI(
        title="LLM Gateway",
        description=(
            "Forwards prompts to a remote generative-language API using named, stored "
            "configurations.\n\n"
            "Design principles:\n"
            "- Callers never see the provider's wire protocol, credentials or response shape.\n"
            "- `/generate` always answers with a single result string; failures are reported "
            "in-band with an `ERROR: ` prefix.\n"
            "- API keys are write-only and never logged; prompts and generated text are not "
            "logged either."
        ),
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
            {
                "name": "gateway",
                "description": "Forward a prompt and return the generated text.",
            },
            {
                "name": "configurations",
                "description": "Administer the named provider configurations.",
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running. Does not check the "
            "configuration database or the provider."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(gateway_router)
    app.include_router(configurations_router)
    return app


app = create_app()
