"""Read-side access to named LLM configurations.

The gateway resolves exactly one configuration per call, by exact name, and
never writes to the store. Stores are injected so the pipeline can run against
an in-memory fake as easily as against the database.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from llm_gateway.configs.models import LLMConfigurationRow
from llm_gateway.configs.service import get_configuration
from llm_gateway.domain.exceptions import ConfigNotFoundError


@dataclass(frozen=True)
class LLMConfiguration:
    name: str
    api_key: str = field(repr=False)
    model_name: str
    api_url: str


class ConfigStore(Protocol):
    async def resolve(self, name: str) -> LLMConfiguration: ...


def _to_configuration(row: LLMConfigurationRow) -> LLMConfiguration:
    return LLMConfiguration(
        name=row.name,
        api_key=row.api_key,
        model_name=row.model_name,
        api_url=row.api_url,
    )


class SqlConfigStore:
    """Resolve configurations from the `llm_configurations` table.

    A fresh session is opened per lookup, so concurrent calls never share one.
    """

    def __init__(self, *, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker

    async def resolve(self, name: str) -> LLMConfiguration:
        async with self._sessionmaker() as session:
            row = await get_configuration(session=session, name=name)
        return _to_configuration(row)


class InMemoryConfigStore:
    def __init__(self, configurations: Iterable[LLMConfiguration] = ()):
        self._by_name: Mapping[str, LLMConfiguration] = {c.name: c for c in configurations}

    async def resolve(self, name: str) -> LLMConfiguration:
        try:
            return self._by_name[name]
        except KeyError:
            raise ConfigNotFoundError(name) from None
