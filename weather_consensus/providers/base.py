"""
Shared plumbing for weather providers.

Every provider exposes the same two coroutines, current() and forecast(),
and raises a ProviderError subclass on any failure. The HTTP round-trip
and the strict field readers live here so the concrete providers only
describe their endpoints and JSON paths.
"""

import json
import logging
import math
from typing import Any, Dict, Optional

import httpx

from weather_consensus.errors import ParseError, TransportError
from weather_consensus.models import ForecastSeries, WeatherReport

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


class WeatherProvider:
    """
    Base class for a single weather data source.

    Subclasses set `name` and implement current() and forecast().
    A custom httpx transport can be passed in for testing.
    """

    name = "provider"

    HEADERS = {
        "Content-Type": "application/json",
        "User-Agent": "weather-consensus/1.0",
    }

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        if not self.api_key:
            logger.warning(f"[{type(self).__name__}] No API key configured!")

    async def current(self, city: str) -> WeatherReport:
        raise NotImplementedError

    async def forecast(self, city: str, days: int) -> ForecastSeries:
        raise NotImplementedError

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        """
        GET {base_url}/{path} and decode the JSON body.

        Raises:
            TransportError: no API key, network failure, non-2xx status,
                or a body that is not JSON
        """
        if not self.api_key:
            raise TransportError(self.name, "no API key configured")

        url = f"{self.base_url}/{path}"
        logger.debug(f"[{type(self).__name__}] GET {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(url, params=params, headers=self.HEADERS)
        except httpx.RequestError as e:
            raise TransportError(self.name, f"request to {path} failed: {e}") from e

        logger.debug(f"[{type(self).__name__}] Response status: {resp.status_code}")

        if not resp.is_success:
            raise TransportError(self.name, f"HTTP {resp.status_code} from {path}: {resp.text[:200]}")

        try:
            return json.loads(resp.content, parse_constant=_reject_constant)
        except ValueError as e:
            raise TransportError(self.name, f"invalid JSON from {path}: {e}") from e

    # Strict field readers. A missing key, a wrong container type or a
    # value of the wrong type are all reported the same way.

    def _dig(self, data: Any, *path: Any) -> Any:
        node = data
        for key in path:
            try:
                node = node[key]
            except (KeyError, IndexError, TypeError):
                raise ParseError(self.name, f"missing field {_format_path(path)}") from None
        return node

    def _number(self, data: Any, *path: Any) -> float:
        value = self._dig(data, *path)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ParseError(self.name, f"field {_format_path(path)} is not a number: {value!r}")
        if not math.isfinite(value):
            raise ParseError(self.name, f"field {_format_path(path)} is not finite: {value!r}")
        return float(value)

    def _timestamp(self, data: Any, *path: Any) -> int:
        value = self._dig(data, *path)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ParseError(self.name, f"field {_format_path(path)} is not a unix timestamp: {value!r}")
        return value

    def _list(self, data: Any, *path: Any) -> list:
        value = self._dig(data, *path)
        if not isinstance(value, list):
            raise ParseError(self.name, f"field {_format_path(path)} is not a list")
        return value

    def _take_days(self, entries: list, days: int) -> list:
        """Cut the provider's daily list to exactly `days` entries."""
        if len(entries) < days:
            raise ParseError(self.name, f"requested {days} days but got {len(entries)}")
        return entries[:days]


def _reject_constant(token: str):
    # NaN / Infinity / -Infinity are not valid JSON
    raise ValueError(f"non-standard JSON constant {token}")


def _format_path(path) -> str:
    parts = []
    for key in path:
        if isinstance(key, int):
            parts.append(f"[{key}]")
        else:
            parts.append(f".{key}" if parts else str(key))
    return "".join(parts)
