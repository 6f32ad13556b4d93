"""Seed a default LLM configuration for local development.

This script is designed to be safe to run multiple times:
- It only runs when APP_ENV=development
- It inserts a row only when the llm_configurations table is empty
- The API key is read from GEMINI_API_KEY and never printed
"""

# ruff: noqa: I001
# pyright: reportMissingImports=false
from __future__ import annotations

import asyncio
import os

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from llm_gateway.configs.models import LLMConfigurationRow

DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


async def seed_configurations_if_empty(*, database_url: str, api_key: str) -> None:
    """Insert the `default` configuration if the table is empty."""
    engine = create_async_engine(database_url, pool_pre_ping=True)
    sessionmaker = async_sessionmaker(engine, expire_on_commit=False)

    async with sessionmaker() as session:
        stmt = select(func.count()).select_from(LLMConfigurationRow)
        total = int((await session.execute(stmt)).scalar_one())
        if total > 0:
            print(f"Seed skipped: llm_configurations already has {total} row(s).")
            await engine.dispose()
            return

        session.add(
            LLMConfigurationRow(
                name=os.getenv("DEFAULT_CONFIG_NAME", "default"),
                api_key=api_key,
                model_name=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
                api_url=os.getenv("GEMINI_API_URL", DEFAULT_API_URL),
            )
        )
        await session.commit()
        print("Seeded 1 configuration.")

    await engine.dispose()


def main() -> None:
    """Entry point."""
    app_env = os.getenv("APP_ENV", "production").strip().lower()
    if app_env != "development":
        print(f"Seed skipped: APP_ENV={app_env!r} (seeding only runs in development).")
        return

    database_url = os.getenv("DATABASE_URL", "")
    if not database_url:
        raise SystemExit("DATABASE_URL is not set")

    api_key = os.getenv("GEMINI_API_KEY", "")
    if not api_key:
        raise SystemExit("GEMINI_API_KEY is not set")

    asyncio.run(seed_configurations_if_empty(database_url=database_url, api_key=api_key))


if __name__ == "__main__":
    main()
