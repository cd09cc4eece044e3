"""
Weather Consensus command line front end.

    weather-consensus daily --city London
    weather-consensus daily --city London --days-since 2
    weather-consensus forecast --city London --days 5

Exit codes: 0 on success, 1 when no provider returned data,
2 on invalid arguments.
"""

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime, timezone

from colorama import Fore, Style, init

from weather_consensus.aggregator import WeatherAggregator
from weather_consensus.config import Settings, build_providers
from weather_consensus.errors import AggregationFailure

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        number = -1
    if number < 0:
        raise argparse.ArgumentTypeError("days_since should be non-negative number")
    return number


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1:
        raise argparse.ArgumentTypeError("days should be a positive number")
    return number


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="weather-consensus",
        description="Consensus weather from several providers",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    daily = subparsers.add_parser("daily", help="current weather, or one forecast day")
    daily.add_argument("--city", "--city-name", dest="city", required=True)
    daily.add_argument("--days-since", type=non_negative_int, default=None,
                       help="day offset, 0 = today (omit for current conditions)")

    forecast = subparsers.add_parser("forecast", help="multi-day forecast")
    forecast.add_argument("--city", "--city-name", dest="city", required=True)
    forecast.add_argument("--days", type=positive_int, required=True)

    return parser.parse_args(argv)


def configure_logging(settings: Settings) -> None:
    """Log to a file and to stderr, keeping stdout for results."""
    log_dir = os.path.dirname(settings.log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(settings.log_file, mode='a', encoding='utf-8'),
            logging.StreamHandler(sys.stderr)
        ]
    )


def format_date(unix_timestamp: int) -> str:
    return datetime.fromtimestamp(unix_timestamp, tz=timezone.utc).strftime("%Y-%m-%d")


async def run(args, aggregator: WeatherAggregator) -> int:
    """Execute one parsed command and print the result."""
    try:
        if args.command == "forecast":
            forecast = await aggregator.get_forecast_weather(args.city, args.days)
            for report in forecast:
                print(f"{format_date(report.observed_at)} Temperature: {report.temperature}")
        elif args.days_since is None:
            report = await aggregator.get_current_weather(args.city)
            print(f"Temperature: {report.temperature}")
        else:
            report = await aggregator.get_specific_day_weather(args.city, args.days_since)
            print(f"Temperature: {report.temperature}")
    except AggregationFailure as e:
        logger.error(f"[run] {args.command} for {args.city!r} failed: {e}")
        print(f"{Fore.RED}{e}{Style.RESET_ALL}")
        return 1
    return 0


async def main(argv=None) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings)

    logger.info("=" * 60)
    logger.info(f"Weather Consensus - {args.command} for {args.city!r}")
    logger.info("=" * 60)

    aggregator = WeatherAggregator(build_providers(settings))
    return await run(args, aggregator)


def entry_point() -> None:
    init()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    entry_point()
