"""
Providers package for Weather Consensus

Each provider turns a (city, optional day count) request into one or two
HTTP calls and parses the provider's native JSON into WeatherReports:

1. OpenWeather - /weather for current, /onecall (by lat/lon) for daily forecasts
2. Weatherbit  - /current and /forecast/daily

All providers share the WeatherProvider interface, so the aggregator
takes any list of them.
"""

from weather_consensus.providers.base import (
    WeatherProvider,
    DEFAULT_TIMEOUT,
)

from weather_consensus.providers.open_weather import (
    OpenWeatherProvider,
    OPEN_WEATHER_URL,
)

from weather_consensus.providers.weatherbit import (
    WeatherbitProvider,
    WEATHERBIT_URL,
)

__all__ = [
    # Shared interface
    "WeatherProvider",
    "DEFAULT_TIMEOUT",
    # OpenWeather
    "OpenWeatherProvider",
    "OPEN_WEATHER_URL",
    # Weatherbit
    "WeatherbitProvider",
    "WEATHERBIT_URL",
]
