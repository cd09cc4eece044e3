"""
Environment configuration for Weather Consensus.

Values come from the process environment, optionally seeded from a .env
file. API keys are passed to providers as opaque strings; a missing key
is logged, and the provider then fails on every call without a request.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from weather_consensus.providers import (
    DEFAULT_TIMEOUT,
    OPEN_WEATHER_URL,
    WEATHERBIT_URL,
    OpenWeatherProvider,
    WeatherbitProvider,
    WeatherProvider,
)

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "logs/weather_consensus.log"


@dataclass
class Settings:
    """Runtime settings for providers and logging."""
    open_weather_appid: Optional[str] = None
    weatherbit_api_key: Optional[str] = None
    open_weather_url: str = OPEN_WEATHER_URL
    weatherbit_url: str = WEATHERBIT_URL
    http_timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    log_file: str = DEFAULT_LOG_FILE

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """
        Build Settings from environment variables.

        Args:
            load_env_file: also read a .env file from the working directory
        """
        if load_env_file:
            load_dotenv()

        timeout_raw = os.getenv("WEATHER_HTTP_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
        except ValueError:
            logger.warning(f"[Settings] Invalid WEATHER_HTTP_TIMEOUT={timeout_raw!r}, "
                           f"using {DEFAULT_TIMEOUT}s")
            timeout = DEFAULT_TIMEOUT

        settings = cls(
            open_weather_appid=os.getenv("OPEN_WEATHER_APPID"),
            weatherbit_api_key=os.getenv("WEATHERBIT_API_KEY"),
            open_weather_url=os.getenv("OPEN_WEATHER_URL", OPEN_WEATHER_URL),
            weatherbit_url=os.getenv("WEATHERBIT_URL", WEATHERBIT_URL),
            http_timeout=timeout,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", DEFAULT_LOG_FILE),
        )

        if not settings.open_weather_appid:
            logger.warning("[Settings] OPEN_WEATHER_APPID not set")
        if not settings.weatherbit_api_key:
            logger.warning("[Settings] WEATHERBIT_API_KEY not set")

        return settings


def build_providers(settings: Settings) -> List[WeatherProvider]:
    """Construct the default provider list, in fan-out order."""
    return [
        OpenWeatherProvider(
            settings.open_weather_appid,
            base_url=settings.open_weather_url,
            timeout=settings.http_timeout,
        ),
        WeatherbitProvider(
            settings.weatherbit_api_key,
            base_url=settings.weatherbit_url,
            timeout=settings.http_timeout,
        ),
    ]
