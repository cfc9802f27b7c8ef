"""Command-line entry point.

Example:
    life-destiny --gender male --birth-year 1990 \\
        --pillars 庚午 辛巳 甲子 丙寅 --start-age 8 --first-da-yun 壬午
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .core.models import Gender, UserInput
from .integration.errors import LifeDestinyError
from .integration.orchestrator import RequestOrchestrator
from .logging_config import configure_logging, resolve_level
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a life K-line chart and Bazi analysis via an LLM endpoint")
    parser.add_argument("--name", default="", help="Subject name (optional)")
    parser.add_argument("--gender", choices=[g.value for g in Gender], required=True, help="Subject gender")
    parser.add_argument("--birth-year", required=True, help="Solar birth year")
    parser.add_argument(
        "--pillars",
        nargs=4,
        metavar=("YEAR", "MONTH", "DAY", "HOUR"),
        required=True,
        help="Pre-computed year, month, day and hour pillars",
    )
    parser.add_argument("--start-age", required=True, help="Age (xu sui) at which the first Da Yun starts")
    parser.add_argument("--first-da-yun", required=True, help="First Da Yun pillar")
    parser.add_argument("--api-key", default=None, help="API key (default: LIFE_DESTINY_API_KEY)")
    parser.add_argument("--base-url", default=None, help="API base URL (default: LIFE_DESTINY_API_BASE_URL)")
    parser.add_argument("--model", default=None, help="Model name (default: LIFE_DESTINY_MODEL_NAME)")
    parser.add_argument("--output", type=str, help="Write the JSON result to this file instead of stdout")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def input_from_args(args: argparse.Namespace, settings: Settings) -> UserInput:
    """Build a UserInput, falling back to settings for credentials and model."""
    year, month, day, hour = args.pillars
    return UserInput(
        api_key=args.api_key if args.api_key is not None else settings.api_key,
        api_base_url=args.base_url if args.base_url is not None else settings.api_base_url,
        model_name=args.model if args.model is not None else settings.model_name,
        name=args.name,
        gender=Gender(args.gender),
        birth_year=args.birth_year,
        year_pillar=year,
        month_pillar=month,
        day_pillar=day,
        hour_pillar=hour,
        start_age=args.start_age,
        first_da_yun=args.first_da_yun,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(source="cli", level=resolve_level(settings.log_level, args.debug))

    user_input = input_from_args(args, settings)
    orchestrator = RequestOrchestrator(timeout=settings.request_timeout)

    try:
        result = asyncio.run(orchestrator.generate(user_input))
    except LifeDestinyError as e:
        print(f"生成失败: {e}", file=sys.stderr)
        return 1

    output = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        logger.info(f"Wrote result to {args.output}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
