"""
Error taxonomy for Weather Consensus

Provider-level errors never escape the aggregator as distinct types:
they are collapsed into "this provider produced no data". Only the
all-providers-failed case reaches callers, as AggregationFailure.

Hierarchy:
    ProviderError
        TransportError - network failure, non-2xx status, body is not JSON
        ParseError     - JSON decoded but required fields are missing
    AggregationFailure
        DayOutOfRangeError - consensus forecast too short for requested day
"""

import json
import logging
from enum import Enum
from typing import Tuple

import httpx

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base class for failures local to a single provider."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"[{provider}] {message}")
        self.provider = provider


class TransportError(ProviderError):
    """The provider could not be reached or answered with an unusable body."""


class ParseError(ProviderError):
    """The provider answered with JSON that lacks a required field."""


class AggregationFailure(Exception):
    """No usable weather data could be produced for a request."""


class DayOutOfRangeError(AggregationFailure):
    """The consensus forecast does not reach the requested day offset."""


class ErrorType(Enum):
    """Categories of provider failures for outcome logging."""
    TIMEOUT = "timeout"
    API_ERROR = "api_error"
    PARSE_ERROR = "parse_error"
    UNKNOWN = "unknown"


def categorize_error(exception: BaseException) -> Tuple[ErrorType, str]:
    """
    Categorize an exception for outcome tracking.

    Provider errors are classified by their own type, with timeouts
    recognized through the chained httpx exception.

    Returns:
        Tuple of (ErrorType, error_message)
    """
    error_msg = str(exception)[:200]  # Truncate long messages

    if isinstance(exception, httpx.TimeoutException) or isinstance(
        exception.__cause__, httpx.TimeoutException
    ):
        return (ErrorType.TIMEOUT, f"Timeout: {error_msg}")

    elif isinstance(exception, ParseError):
        return (ErrorType.PARSE_ERROR, f"Parse error: {error_msg}")

    elif isinstance(exception, (TransportError, httpx.HTTPError)):
        return (ErrorType.API_ERROR, f"Request error: {error_msg}")

    elif isinstance(exception, (json.JSONDecodeError, KeyError, ValueError, TypeError)):
        return (ErrorType.PARSE_ERROR, f"Parse error: {error_msg}")

    else:
        return (ErrorType.UNKNOWN, error_msg)
