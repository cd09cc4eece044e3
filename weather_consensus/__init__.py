"""
Weather Consensus

Current and multi-day temperature forecasts for a city, averaged across
several independent weather providers queried concurrently.

Quorum-of-one: the result is available as long as at least one provider
answers. Failed providers are dropped; the survivors are combined with a
running (streaming) mean.

Architecture:
    providers/     - Provider clients:
                     * open_weather.py - OpenWeather (current + onecall daily)
                     * weatherbit.py   - Weatherbit (current + forecast/daily)
    ensemble.py    - Running mean accumulators and positional forecast merge
    aggregator.py  - Concurrent fan-out, failure policy, day selection
    config.py      - Environment settings and default provider list
    cli.py         - Command line front end

Entry Points:
    weather-consensus daily --city NAME [--days-since N]
    weather-consensus forecast --city NAME --days N
"""

from weather_consensus.aggregator import (
    WeatherAggregator,
    get_current_weather,
    get_forecast_weather,
    get_specific_day_weather,
)
from weather_consensus.errors import AggregationFailure, DayOutOfRangeError
from weather_consensus.models import WeatherReport

__version__ = "1.0.0"

__all__ = [
    "WeatherAggregator",
    "WeatherReport",
    "AggregationFailure",
    "DayOutOfRangeError",
    "get_current_weather",
    "get_forecast_weather",
    "get_specific_day_weather",
]
