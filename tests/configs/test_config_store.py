from __future__ import annotations

import asyncio

import pytest

from llm_gateway.configs.service import create_configuration
from llm_gateway.configs.store import InMemoryConfigStore, LLMConfiguration, SqlConfigStore
from llm_gateway.core.db import create_engine, create_sessionmaker
from llm_gateway.domain.exceptions import ConfigNotFoundError


def _resolve_from_sql(*, database_url: str, name: str) -> LLMConfiguration:
    async def run() -> LLMConfiguration:
        engine = create_engine(database_url=database_url)
        sessionmaker = create_sessionmaker(engine=engine)
        try:
            async with sessionmaker() as session:
                await create_configuration(
                    session=session,
                    name="default",
                    api_key="k",
                    model_name="gemini-test",
                    api_url="https://provider.test/{model}",
                )
            return await SqlConfigStore(sessionmaker=sessionmaker).resolve(name)
        finally:
            await engine.dispose()

    return asyncio.run(run())


def test_sql_store_resolves_by_exact_name(database_url: str) -> None:
    config = _resolve_from_sql(database_url=database_url, name="default")

    assert config == LLMConfiguration(
        name="default",
        api_key="k",
        model_name="gemini-test",
        api_url="https://provider.test/{model}",
    )


@pytest.mark.parametrize("name", ["missing", "Default", "defaul", "default "])
def test_sql_store_has_no_partial_or_case_insensitive_match(database_url: str, name: str) -> None:
    with pytest.raises(ConfigNotFoundError) as excinfo:
        _resolve_from_sql(database_url=database_url, name=name)

    assert excinfo.value.name == name


def test_in_memory_store_raises_not_found() -> None:
    store = InMemoryConfigStore(
        [LLMConfiguration(name="a", api_key="k", model_name="m", api_url="https://x.test")]
    )

    assert asyncio.run(store.resolve("a")).model_name == "m"
    with pytest.raises(ConfigNotFoundError):
        asyncio.run(store.resolve("b"))


def test_configuration_repr_hides_api_key() -> None:
    config = LLMConfiguration(name="a", api_key="hunter2", model_name="m", api_url="https://x")

    assert "hunter2" not in repr(config)
