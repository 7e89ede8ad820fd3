"""HTTP fetcher for the air sensor's JSON endpoint."""

import asyncio
import json
import logging
import math
from typing import Any, Dict, Optional, Union

import aiohttp

from indoorair.shared.models import SensorReading
from .exceptions import NetworkError, ParseError

logger = logging.getLogger(__name__)

# Older sensor firmware does not send aqi.
REQUIRED_FIELDS = ("eco2", "tvoc", "temperature", "humidity", "pressure", "gas_kohms")
OPTIONAL_FIELDS = ("aqi",)


def _as_number(name: str, value: Any) -> float:
    # bool is an int subclass, but true/false is never a sensor value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"Field '{name}' is not a number: {value!r}")

    try:
        number = float(value)
    except OverflowError as e:
        raise ParseError(f"Field '{name}' is out of range: {value!r}") from e
    if not math.isfinite(number):
        raise ParseError(f"Field '{name}' is not finite: {value!r}")
    return number


def parse_payload(body: Union[str, bytes]) -> SensorReading:
    """Parse and validate a sensor response body.

    Args:
        body: Raw response body.

    Returns:
        The parsed reading.

    Raises:
        ParseError: If the body is not JSON, is not an object, is missing a
            required field, or carries a value outside its domain.
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ParseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

    values: Dict[str, Any] = {}
    for name in REQUIRED_FIELDS:
        if name not in data or data[name] is None:
            raise ParseError(f"Missing required field '{name}'")
        values[name] = _as_number(name, data[name])

    for name in OPTIONAL_FIELDS:
        if data.get(name) is not None:
            values[name] = _as_number(name, data[name])

    if values["eco2"] < 0:
        raise ParseError(f"eco2 must be non-negative, got {values['eco2']}")
    if values["tvoc"] < 0:
        raise ParseError(f"tvoc must be non-negative, got {values['tvoc']}")
    if not 0 <= values["humidity"] <= 100:
        raise ParseError(f"humidity must be within 0-100, got {values['humidity']}")

    if "aqi" in values:
        if not values["aqi"].is_integer():
            raise ParseError(f"aqi must be an integer, got {values['aqi']}")
        values["aqi"] = int(values["aqi"])

    return SensorReading(**values)


class SensorFetcher:
    """Fetches one reading per call from the sensor's HTTP endpoint."""

    def __init__(self, url: str, timeout: Optional[float] = None):
        """
        Args:
            url: Sensor endpoint returning the JSON payload.
            timeout: Total request timeout in seconds. None leaves it to
                aiohttp's default.
        """
        self.url = url
        self.timeout = timeout

    def _session_kwargs(self) -> Dict[str, Any]:
        if self.timeout is None:
            return {}
        return {"timeout": aiohttp.ClientTimeout(total=self.timeout)}

    async def fetch(self, url: Optional[str] = None) -> SensorReading:
        """Perform one GET and parse the response.

        Raises:
            NetworkError: On connection, timeout or HTTP status errors.
            ParseError: If the body is not a valid sensor payload.
        """
        url = url or self.url
        logger.debug(f"Fetching sensor data from {url}")

        try:
            async with aiohttp.ClientSession(**self._session_kwargs()) as session:
                async with session.get(url) as response:
                    response.raise_for_status()
                    body = await response.read()
        except aiohttp.ClientResponseError as e:
            raise NetworkError(f"HTTP {e.status} from {url}: {e.message}") from e
        except asyncio.TimeoutError as e:
            raise NetworkError(f"Request to {url} timed out") from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        reading = parse_payload(body)
        logger.debug(f"Parsed sensor data: {reading.to_dict()}")
        return reading
