"""
Canonical value types shared by providers and the consensus engine.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class WeatherReport:
    """A single temperature observation or daily forecast entry."""
    temperature: float  # Celsius
    observed_at: int    # Unix seconds, UTC


# Ordered by day, index 0 = nearest day
ForecastSeries = List[WeatherReport]
