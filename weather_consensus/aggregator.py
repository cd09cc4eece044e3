"""
Weather Consensus Aggregator

Orchestrates one request across every configured provider:
1. Fan the identical request out to all providers concurrently
2. Wait for every provider to settle (no early exit, no cancellation)
3. Drop failures, fold the successes through the running ensemble
4. Return the mean, or raise AggregationFailure if nothing succeeded

Quorum-of-one: a single answering provider is enough. Individual
provider failures are logged as ProviderOutcomes but never reach the
caller.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from weather_consensus.config import Settings, build_providers
from weather_consensus.ensemble import average_forecast_report, average_report
from weather_consensus.errors import (
    AggregationFailure,
    DayOutOfRangeError,
    ErrorType,
    categorize_error,
)
from weather_consensus.models import ForecastSeries, WeatherReport
from weather_consensus.providers import WeatherProvider

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "Could not find weather data"


@dataclass
class ProviderOutcome:
    """Result of one provider call within a request."""
    provider: str
    data: Any
    elapsed_seconds: float
    error_type: Optional[ErrorType] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_type is None

    @property
    def status_label(self) -> str:
        return "OK" if self.ok else self.error_type.value.upper()


class WeatherAggregator:
    """
    Consensus weather over an injected list of providers.

    The provider list is fixed at construction; every request fans out
    to all of them.
    """

    def __init__(self, providers: Sequence[WeatherProvider]):
        self.providers: List[WeatherProvider] = list(providers)
        if not self.providers:
            raise ValueError("WeatherAggregator needs at least one provider")
        logger.info(f"[WeatherAggregator] Providers: {[p.name for p in self.providers]}")

    async def get_current_weather(self, city: str) -> WeatherReport:
        """
        Mean current conditions for `city`.

        Raises:
            AggregationFailure: if no provider returned usable data
        """
        reports = await self._fan_out("current", city)
        return average_report(reports)

    async def get_forecast_weather(self, city: str, days: int) -> ForecastSeries:
        """
        Mean daily forecast for `city`, `days` entries, nearest day first.

        Raises:
            AggregationFailure: if no provider returned usable data
        """
        forecasts = await self._fan_out("forecast", city, days)
        return average_forecast_report(forecasts)

    async def get_specific_day_weather(self, city: str, offset: int) -> WeatherReport:
        """
        Mean forecast for the day `offset` days from now (0 = today).

        Requests a forecast of offset + 1 days and returns its last entry.

        Raises:
            AggregationFailure: if no provider returned usable data
            DayOutOfRangeError: if offset is negative or the consensus
                forecast is too short
        """
        if offset < 0:
            raise DayOutOfRangeError(f"Day offset must be non-negative, got {offset}")
        forecast = await self.get_forecast_weather(city, offset + 1)
        if offset >= len(forecast):
            raise DayOutOfRangeError(
                f"No forecast for day {offset}: only {len(forecast)} days available"
            )
        return forecast[offset]

    async def _fan_out(self, operation: str, *args) -> List[Any]:
        """
        Call `operation` on every provider concurrently and keep the successes.

        Raises:
            AggregationFailure: if every provider failed
        """
        start = time.time()
        outcomes = await asyncio.gather(
            *(self._call(provider, operation, *args) for provider in self.providers)
        )

        for outcome in outcomes:
            if outcome.ok:
                logger.info(f"[WeatherAggregator] {outcome.provider}: OK ({outcome.elapsed_seconds:.2f}s)")
            else:
                logger.warning(f"[WeatherAggregator] {outcome.provider}: {outcome.status_label} "
                               f"({outcome.elapsed_seconds:.2f}s) - {outcome.error_message}")

        successes = [outcome.data for outcome in outcomes if outcome.ok]
        logger.info(f"[WeatherAggregator] {operation}{args}: {len(successes)}/{len(outcomes)} "
                    f"providers succeeded ({time.time() - start:.2f}s)")

        if not successes:
            raise AggregationFailure(NO_DATA_MESSAGE)
        return successes

    @staticmethod
    async def _call(provider: WeatherProvider, operation: str, *args) -> ProviderOutcome:
        start = time.time()
        try:
            data = await getattr(provider, operation)(*args)
        except Exception as e:
            error_type, error_msg = categorize_error(e)
            return ProviderOutcome(provider.name, None, time.time() - start, error_type, error_msg)
        return ProviderOutcome(provider.name, data, time.time() - start)


def default_aggregator(settings: Optional[Settings] = None) -> WeatherAggregator:
    """Aggregator over the default providers, configured from the environment."""
    if settings is None:
        settings = Settings.from_env()
    return WeatherAggregator(build_providers(settings))


async def get_current_weather(city: str) -> WeatherReport:
    return await default_aggregator().get_current_weather(city)


async def get_forecast_weather(city: str, days: int) -> ForecastSeries:
    return await default_aggregator().get_forecast_weather(city, days)


async def get_specific_day_weather(city: str, offset: int) -> WeatherReport:
    return await default_aggregator().get_specific_day_weather(city, offset)
