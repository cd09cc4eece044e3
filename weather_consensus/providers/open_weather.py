"""
OpenWeather Provider for Weather Consensus

Current conditions come from the /weather endpoint. OpenWeather has no
forecast-by-day-count endpoint for a city name, so forecasts take two
calls: /weather to resolve the city's coordinates, then /onecall for the
daily series at that lat/lon.
"""

import logging

from weather_consensus.models import ForecastSeries, WeatherReport
from weather_consensus.providers.base import WeatherProvider

logger = logging.getLogger(__name__)

OPEN_WEATHER_URL = "http://api.openweathermap.org/data/2.5"


class OpenWeatherProvider(WeatherProvider):
    """
    Provider for OpenWeather (openweathermap.org) data.

    JSON paths:
        current:  main.temp, dt, coord.lat, coord.lon
        forecast: daily[].temp.day, daily[].dt
    """

    name = "OpenWeather"

    def __init__(self, api_key, base_url: str = OPEN_WEATHER_URL, **kwargs):
        super().__init__(api_key, base_url, **kwargs)

    async def current(self, city: str) -> WeatherReport:
        logger.info(f"[OpenWeatherProvider] Fetching current weather for {city!r}...")
        data = await self._get_raw_current(city)
        report = self.parse_current(data)
        logger.info(f"[OpenWeatherProvider] Current: {report.temperature:.1f}C at {report.observed_at}")
        return report

    async def forecast(self, city: str, days: int) -> ForecastSeries:
        logger.info(f"[OpenWeatherProvider] Fetching {days} day forecast for {city!r}...")
        current = await self._get_raw_current(city)
        lat = self._number(current, "coord", "lat")
        lon = self._number(current, "coord", "lon")
        logger.debug(f"[OpenWeatherProvider] Resolved {city!r} to ({lat}, {lon})")

        data = await self._get_json("onecall", {
            "APPID": self.api_key,
            "lat": lat,
            "lon": lon,
            "units": "metric",
            "exclude": "current,minutely,hourly",
        })
        series = self.parse_forecast(data, days)
        logger.info(f"[OpenWeatherProvider] Retrieved {len(series)} daily forecasts")
        return series

    async def _get_raw_current(self, city: str):
        return await self._get_json("weather", {
            "APPID": self.api_key,
            "q": city,
            "units": "metric",
        })

    def parse_current(self, data) -> WeatherReport:
        return WeatherReport(
            temperature=self._number(data, "main", "temp"),
            observed_at=self._timestamp(data, "dt"),
        )

    def parse_forecast(self, data, days: int) -> ForecastSeries:
        entries = self._take_days(self._list(data, "daily"), days)
        return [
            WeatherReport(
                temperature=self._number(entry, "temp", "day"),
                observed_at=self._timestamp(entry, "dt"),
            )
            for entry in entries
        ]
