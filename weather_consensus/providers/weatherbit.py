"""
Weatherbit Provider for Weather Consensus

Fetches current conditions (/current) and daily forecasts
(/forecast/daily) from api.weatherbit.io.

TIMESTAMPS:
Weatherbit entries carry a `ts` field, but it is not guaranteed by every
plan/endpoint. When it is absent the observation time falls back to the
time of the request. OpenWeather has no such fallback (its `dt` is
required), so the two providers differ in timestamp fidelity.
"""

import logging
import time
from typing import Callable

from weather_consensus.models import ForecastSeries, WeatherReport
from weather_consensus.providers.base import WeatherProvider

logger = logging.getLogger(__name__)

WEATHERBIT_URL = "http://api.weatherbit.io/v2.0"


class WeatherbitProvider(WeatherProvider):
    """
    Provider for Weatherbit data.

    JSON paths:
        current:  data[0].temp, data[0].ts (optional)
        forecast: data[].temp, data[].ts (optional)
    """

    name = "Weatherbit"

    def __init__(self, api_key, base_url: str = WEATHERBIT_URL,
                 clock: Callable[[], float] = time.time, **kwargs):
        super().__init__(api_key, base_url, **kwargs)
        self._clock = clock

    async def current(self, city: str) -> WeatherReport:
        logger.info(f"[WeatherbitProvider] Fetching current weather for {city!r}...")
        requested_at = int(self._clock())
        data = await self._get_json("current", {"key": self.api_key, "city": city})
        report = self.parse_current(data, requested_at)
        logger.info(f"[WeatherbitProvider] Current: {report.temperature:.1f}C at {report.observed_at}")
        return report

    async def forecast(self, city: str, days: int) -> ForecastSeries:
        logger.info(f"[WeatherbitProvider] Fetching {days} day forecast for {city!r}...")
        requested_at = int(self._clock())
        data = await self._get_json("forecast/daily", {
            "key": self.api_key,
            "city": city,
            "days": days,
        })
        series = self.parse_forecast(data, days, requested_at)
        logger.info(f"[WeatherbitProvider] Retrieved {len(series)} daily forecasts")
        return series

    def parse_current(self, data, requested_at: int) -> WeatherReport:
        return self._parse_entry(self._dig(data, "data", 0), requested_at)

    def parse_forecast(self, data, days: int, requested_at: int) -> ForecastSeries:
        entries = self._take_days(self._list(data, "data"), days)
        return [self._parse_entry(entry, requested_at) for entry in entries]

    def _parse_entry(self, entry, requested_at: int) -> WeatherReport:
        temperature = self._number(entry, "temp")
        if isinstance(entry, dict) and "ts" not in entry:
            logger.debug(f"[WeatherbitProvider] No ts in entry, using request time {requested_at}")
            observed_at = requested_at
        else:
            observed_at = self._timestamp(entry, "ts")
        return WeatherReport(temperature=temperature, observed_at=observed_at)
