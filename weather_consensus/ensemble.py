"""
Running Ensemble Engine for Weather Consensus

Combines weather reports from several providers into one consensus
report using streaming (running) means.

Key Features:
1. O(1) memory: reports are folded one at a time, never materialized
2. Equal weights: every provider counts the same
3. Spread diagnostic: warns when providers disagree strongly

Outliers are flagged but NOT excluded or down-weighted - a provider
returning wildly different data moves the mean. This is a "warn only"
system.
"""

import logging
import math
from typing import Iterable, List, Optional

from weather_consensus.models import ForecastSeries, WeatherReport

logger = logging.getLogger(__name__)

# Temperature spread (Celsius) between providers that triggers a warning
SPREAD_WARN_C = 5.0


class RunningMean:
    """
    Incremental arithmetic mean.

    Uses mean_n = mean_{n-1} + (x_n - mean_{n-1}) / n so the running
    value never requires the full sample set.
    """

    def __init__(self):
        self.count = 0
        self._mean = 0.0
        self.minimum: Optional[float] = None
        self.maximum: Optional[float] = None

    def add(self, value: float) -> "RunningMean":
        self.count += 1
        self._mean += (value - self._mean) / self.count
        if self.minimum is None or value < self.minimum:
            self.minimum = value
        if self.maximum is None or value > self.maximum:
            self.maximum = value
        return self

    def mean(self) -> float:
        if self.count == 0:
            raise ValueError("mean of an empty RunningMean is undefined")
        return self._mean

    @property
    def spread(self) -> float:
        """Max - min of all values seen, 0.0 when empty."""
        if self.count == 0:
            return 0.0
        return self.maximum - self.minimum


class AverageWeatherReport:
    """
    Accumulator that averages WeatherReports as they arrive.

    Temperature and timestamp are tracked as two independent running
    means. mean() floors the averaged timestamp to whole seconds.
    """

    def __init__(self):
        self.temperature = RunningMean()
        self.unix_timestamp = RunningMean()

    def add(self, report: WeatherReport) -> "AverageWeatherReport":
        self.temperature.add(report.temperature)
        self.unix_timestamp.add(float(report.observed_at))
        return self

    @property
    def count(self) -> int:
        return self.temperature.count

    @property
    def temperature_spread(self) -> float:
        return self.temperature.spread

    def mean(self) -> WeatherReport:
        return WeatherReport(
            temperature=self.temperature.mean(),
            observed_at=math.floor(self.unix_timestamp.mean()),
        )


def _warn_on_spread(average: AverageWeatherReport, label: str) -> None:
    spread = average.temperature_spread
    if spread > SPREAD_WARN_C:
        logger.warning(f"[ensemble] HIGH SPREAD {label}: {spread:.1f}C across "
                       f"{average.count} providers (mean is not down-weighted)")
    else:
        logger.debug(f"[ensemble] {label}: spread={spread:.1f}C across {average.count} providers")


def average_report(reports: Iterable[WeatherReport]) -> WeatherReport:
    """
    Fold reports into a single mean report.

    Raises:
        ValueError: if no reports were given
    """
    average = AverageWeatherReport()
    for report in reports:
        average.add(report)
    _warn_on_spread(average, "current")
    return average.mean()


def average_forecast_report(series_list: Iterable[ForecastSeries]) -> ForecastSeries:
    """
    Positional mean of several forecast series.

    Entries at the same day offset are folded into the same accumulator.
    When the series differ in length the result is cut to the shortest
    one, since later offsets would otherwise be averaged over a different
    provider set than earlier ones.

    Raises:
        ValueError: if no series were given
    """
    series_list = list(series_list)
    if not series_list:
        raise ValueError("cannot average an empty list of forecasts")

    lengths = [len(series) for series in series_list]
    days = min(lengths)
    if len(set(lengths)) > 1:
        logger.warning(f"[average_forecast_report] Mismatched forecast lengths {lengths}, "
                       f"truncating to {days} days")

    averages: List[AverageWeatherReport] = [AverageWeatherReport() for _ in range(days)]
    for series in series_list:
        for average, report in zip(averages, series):
            average.add(report)

    for offset, average in enumerate(averages):
        _warn_on_spread(average, f"day +{offset}")

    return [average.mean() for average in averages]
