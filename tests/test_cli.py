"""
Tests for the command line front end and environment settings.

Run with: python -m pytest tests/test_cli.py -v
"""

import logging
import sys
from argparse import Namespace
from pathlib import Path

import pytest

logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)

sys.path.insert(0, str(Path(__file__).parent.parent))

from weather_consensus.cli import format_date, parse_args, run
from weather_consensus.config import Settings, build_providers
from weather_consensus.errors import AggregationFailure
from weather_consensus.models import WeatherReport
from weather_consensus.providers import DEFAULT_TIMEOUT, OpenWeatherProvider, WeatherbitProvider


class StubAggregator:
    """Stands in for WeatherAggregator; records which operation was used."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def _answer(self, *call):
        self.calls.append(call)
        if self.error is not None:
            raise self.error
        return self.result

    async def get_current_weather(self, city):
        return await self._answer("current", city)

    async def get_forecast_weather(self, city, days):
        return await self._answer("forecast", city, days)

    async def get_specific_day_weather(self, city, offset):
        return await self._answer("day", city, offset)


class TestParseArgs:

    def test_daily_without_offset(self):
        args = parse_args(["daily", "--city", "London"])
        assert args.command == "daily"
        assert args.city == "London"
        assert args.days_since is None

    def test_daily_accepts_city_name_alias(self):
        args = parse_args(["daily", "--city-name", "Kazan", "--days-since", "0"])
        assert args.city == "Kazan"
        assert args.days_since == 0

    def test_city_is_required(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["daily"])
        assert exc_info.value.code == 2

    @pytest.mark.parametrize("value", ["-1", "two", "1.5"])
    def test_days_since_must_be_non_negative(self, value, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["daily", "--city", "London", "--days-since", value])
        assert exc_info.value.code == 2
        assert "days_since should be non-negative number" in capsys.readouterr().err

    def test_forecast_days_must_be_positive(self):
        with pytest.raises(SystemExit):
            parse_args(["forecast", "--city", "London", "--days", "0"])


class TestRun:
    """Test suite for command execution and output."""

    @pytest.mark.asyncio
    async def test_current_weather_output(self, capsys):
        aggregator = StubAggregator(result=WeatherReport(temperature=4.0, observed_at=15))
        args = Namespace(command="daily", city="London", days_since=None)

        code = await run(args, aggregator)

        assert code == 0
        assert aggregator.calls == [("current", "London")]
        assert capsys.readouterr().out.strip() == "Temperature: 4.0"

    @pytest.mark.asyncio
    async def test_specific_day_output(self, capsys):
        aggregator = StubAggregator(result=WeatherReport(temperature=-2.5, observed_at=15))
        args = Namespace(command="daily", city="London", days_since=2)

        code = await run(args, aggregator)

        assert code == 0
        assert aggregator.calls == [("day", "London", 2)]
        assert "Temperature: -2.5" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_forecast_output_one_line_per_day(self, capsys):
        forecast = [
            WeatherReport(temperature=1.0, observed_at=1700000000),
            WeatherReport(temperature=2.0, observed_at=1700086400),
        ]
        aggregator = StubAggregator(result=forecast)
        args = Namespace(command="forecast", city="London", days=2)

        code = await run(args, aggregator)

        lines = capsys.readouterr().out.strip().splitlines()
        assert code == 0
        assert lines == [
            "2023-11-14 Temperature: 1.0",
            "2023-11-15 Temperature: 2.0",
        ]

    @pytest.mark.asyncio
    async def test_aggregation_failure_exits_1(self, capsys):
        aggregator = StubAggregator(error=AggregationFailure("Could not find weather data"))
        args = Namespace(command="daily", city="nowhere", days_since=None)

        code = await run(args, aggregator)

        assert code == 1
        assert "Could not find weather data" in capsys.readouterr().out

    def test_format_date_is_utc(self):
        assert format_date(0) == "1970-01-01"


class TestSettings:
    """Test suite for environment configuration."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OPEN_WEATHER_APPID", "ow-key")
        monkeypatch.setenv("WEATHERBIT_API_KEY", "wb-key")
        monkeypatch.setenv("WEATHERBIT_URL", "http://wb.test/v2.0")
        monkeypatch.setenv("WEATHER_HTTP_TIMEOUT", "3.5")

        settings = Settings.from_env(load_env_file=False)

        assert settings.open_weather_appid == "ow-key"
        assert settings.weatherbit_api_key == "wb-key"
        assert settings.weatherbit_url == "http://wb.test/v2.0"
        assert settings.http_timeout == 3.5

    def test_invalid_timeout_falls_back(self, monkeypatch):
        monkeypatch.setenv("WEATHER_HTTP_TIMEOUT", "soon")
        assert Settings.from_env(load_env_file=False).http_timeout == DEFAULT_TIMEOUT

    def test_missing_keys_are_not_fatal(self, monkeypatch, caplog):
        monkeypatch.delenv("OPEN_WEATHER_APPID", raising=False)
        monkeypatch.delenv("WEATHERBIT_API_KEY", raising=False)

        with caplog.at_level(logging.WARNING):
            settings = Settings.from_env(load_env_file=False)

        assert settings.open_weather_appid is None
        assert "OPEN_WEATHER_APPID not set" in caplog.text

    def test_build_providers(self):
        settings = Settings(open_weather_appid="ow", weatherbit_api_key="wb", http_timeout=2.0)

        providers = build_providers(settings)

        assert [type(p) for p in providers] == [OpenWeatherProvider, WeatherbitProvider]
        assert [p.api_key for p in providers] == ["ow", "wb"]
        assert all(p.timeout == 2.0 for p in providers)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
