"""Administration of the configuration table.

The gateway itself never writes configurations; this module backs the
`/configurations` admin endpoints and the development seed script.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from llm_gateway.configs.models import LLMConfigurationRow
from llm_gateway.domain.exceptions import BusinessValidationError, ConfigNotFoundError


def _validate_api_url(*, api_url: str) -> str:
    normalized = api_url.strip()
    if not normalized.lower().startswith(("https://", "http://")):
        raise BusinessValidationError("api_url must be an http(s) URL.")
    return normalized


async def list_configurations(*, session: AsyncSession) -> list[LLMConfigurationRow]:
    stmt = select(LLMConfigurationRow).order_by(LLMConfigurationRow.name.asc())
    return list((await session.execute(stmt)).scalars().all())


async def get_configuration(*, session: AsyncSession, name: str) -> LLMConfigurationRow:
    stmt = select(LLMConfigurationRow).where(LLMConfigurationRow.name == name).limit(1)
    row = (await session.execute(stmt)).scalar_one_or_none()
    if row is None:
        raise ConfigNotFoundError(name)
    return row


async def create_configuration(
    *,
    session: AsyncSession,
    name: str,
    api_key: str,
    model_name: str,
    api_url: str,
) -> LLMConfigurationRow:
    row = LLMConfigurationRow(
        name=name,
        api_key=api_key,
        model_name=model_name,
        api_url=_validate_api_url(api_url=api_url),
    )
    session.add(row)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise BusinessValidationError(f"Configuration '{name}' already exists.") from None

    await session.refresh(row)
    return row


async def update_configuration(
    *,
    session: AsyncSession,
    row: LLMConfigurationRow,
    api_key: str | None,
    model_name: str | None,
    api_url: str | None,
) -> LLMConfigurationRow:
    if api_key is not None:
        row.api_key = api_key
    if model_name is not None:
        row.model_name = model_name
    if api_url is not None:
        row.api_url = _validate_api_url(api_url=api_url)

    await session.commit()
    await session.refresh(row)
    return row


async def delete_configuration(*, session: AsyncSession, row: LLMConfigurationRow) -> None:
    await session.delete(row)
    await session.commit()
