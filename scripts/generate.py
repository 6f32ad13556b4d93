"""Send one prompt through the gateway from the command line.

Usage:
    python scripts/generate.py "What is the capital of France?"
    python scripts/generate.py --config staging --debug "Say hello"

Reads DATABASE_URL (and the other gateway settings) from the environment or .env.
Always prints a single result; failures are printed with the `ERROR: ` prefix.
"""

# pyright: reportMissingImports=false
from __future__ import annotations

import argparse
import asyncio
import sys

from llm_gateway.core.db import create_engine, create_sessionmaker
from llm_gateway.core.settings import get_settings
from llm_gateway.gateway.deps import build_gateway_service
from llm_gateway.gateway.transport import HttpxTransport


def _print_debug_line(line: str) -> None:
    print(f"[debug] {line}", file=sys.stderr)


async def run(*, prompt: str, config_name: str | None, debug: bool) -> str:
    settings = get_settings()
    engine = create_engine(database_url=str(settings.database_url))
    try:
        service = build_gateway_service(
            sessionmaker=create_sessionmaker(engine=engine),
            transport=HttpxTransport(timeout_seconds=float(settings.gateway_timeout_seconds)),
            settings=settings,
        )
        return await service.generate_text(
            prompt,
            debug=debug,
            config_name=config_name,
            sink=_print_debug_line,
        )
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Forward a prompt to the configured LLM.")
    parser.add_argument("prompt", help="Prompt text")
    parser.add_argument("--config", dest="config_name", default=None, help="Configuration name")
    parser.add_argument("--debug", action="store_true", help="Narrate the call on stderr")
    args = parser.parse_args()

    print(asyncio.run(run(prompt=args.prompt, config_name=args.config_name, debug=args.debug)))


if __name__ == "__main__":
    main()
