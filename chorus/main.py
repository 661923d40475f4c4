"""Chorus entry point: answer one question from the command line.

Usage::

    python -m chorus.main "Why does this algorithm run slowly?"
"""

import argparse
import asyncio
import logging
import sys

from chorus.config import settings
from chorus.engine import Query, build_engine
from chorus.errors import ChorusError
from chorus.llm.pricing import format_cost

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level),
)
logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chorus", description=__doc__.splitlines()[0])
    parser.add_argument("question", help="The question to answer")
    parser.add_argument("--user", default=None, help="User id for memory and profile")
    parser.add_argument("--mode", default=None, help="Force a synthesis strategy")
    parser.add_argument(
        "--style",
        default=None,
        choices=["concise", "detailed", "technical", "casual"],
        help="Response style",
    )
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    engine = await build_engine(settings)
    health = engine.health()
    logger.info("Providers: %s", health["providers"] or "none")

    preferences = {
        key: value
        for key, value in (("reasoning_mode", args.mode), ("response_style", args.style))
        if value
    }
    try:
        query = Query(text=args.question, user_id=args.user, preferences=preferences)
        result = await engine.handle(query)
    except ChorusError as exc:
        logger.error("Request failed (%s): %s", exc.reason, exc.message)
        return 1

    print(result.text)
    print()
    print(
        f"[{result.strategy.value} via {result.source} | "
        f"confidence {result.confidence:.2f} | {result.tokens} tokens | {format_cost(result.cost)}]"
    )
    for failure in result.failures:
        print(f"[{failure.source} {failure.reason}: {failure.detail}]")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Answer a single question and print the synthesized result."""
    return asyncio.run(_run(_parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
