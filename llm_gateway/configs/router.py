from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from llm_gateway.configs.schemas import (
    ConfigurationCreate,
    ConfigurationListOut,
    ConfigurationOut,
    ConfigurationUpdate,
)
from llm_gateway.configs.service import (
    create_configuration,
    delete_configuration,
    get_configuration,
    list_configurations,
    update_configuration,
)
from llm_gateway.core.db import get_session

# ConfigNotFoundError raised below is mapped to 404 by the app's exception handlers.
router = APIRouter(prefix="/configurations", tags=["configurations"])


@router.get("", response_model=ConfigurationListOut)
async def get_configurations(
    session: AsyncSession = Depends(get_session),
) -> ConfigurationListOut:
    rows = await list_configurations(session=session)
    return ConfigurationListOut(items=[ConfigurationOut.model_validate(r) for r in rows])


@router.get("/{name}", response_model=ConfigurationOut)
async def get_configuration_by_name(
    name: str,
    session: AsyncSession = Depends(get_session),
) -> ConfigurationOut:
    row = await get_configuration(session=session, name=name)
    return ConfigurationOut.model_validate(row)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ConfigurationOut)
async def create_configuration_route(
    payload: ConfigurationCreate,
    session: AsyncSession = Depends(get_session),
) -> ConfigurationOut:
    row = await create_configuration(
        session=session,
        name=payload.name,
        api_key=payload.api_key,
        model_name=payload.model_name,
        api_url=payload.api_url,
    )
    return ConfigurationOut.model_validate(row)


@router.put("/{name}", response_model=ConfigurationOut)
async def update_configuration_by_name(
    name: str,
    payload: ConfigurationUpdate,
    session: AsyncSession = Depends(get_session),
) -> ConfigurationOut:
    row = await get_configuration(session=session, name=name)
    updated = await update_configuration(
        session=session,
        row=row,
        api_key=payload.api_key,
        model_name=payload.model_name,
        api_url=payload.api_url,
    )
    return ConfigurationOut.model_validate(updated)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT, response_model=None)
async def delete_configuration_by_name(
    name: str,
    session: AsyncSession = Depends(get_session),
) -> None:
    row = await get_configuration(session=session, name=name)
    await delete_configuration(session=session, row=row)
    return None
