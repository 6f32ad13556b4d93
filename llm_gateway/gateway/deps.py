from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from llm_gateway.configs.store import SqlConfigStore
from llm_gateway.core.db import get_sessionmaker
from llm_gateway.core.settings import Settings, get_settings
from llm_gateway.gateway.service import GatewayService
from llm_gateway.gateway.transport import HttpxTransport, Transport


def get_transport() -> Transport:
    """Dependency provider for the provider transport (overridden in tests)."""

    settings = get_settings()
    return HttpxTransport(timeout_seconds=float(settings.gateway_timeout_seconds))


def build_gateway_service(
    *,
    sessionmaker: async_sessionmaker[AsyncSession],
    transport: Transport,
    settings: Settings,
) -> GatewayService:
    return GatewayService(
        store=SqlConfigStore(sessionmaker=sessionmaker),
        transport=transport,
        default_config_name=settings.default_config_name,
        chunk_size=int(settings.gateway_chunk_size),
    )


def get_gateway_service(
    request: Request,
    transport: Transport = Depends(get_transport),
) -> GatewayService:
    return build_gateway_service(
        sessionmaker=get_sessionmaker(request),
        transport=transport,
        settings=get_settings(),
    )
