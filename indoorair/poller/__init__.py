"""Sensor polling: fetch, classify and hold the latest reading."""

from .classifier import AirQuality, Co2Status, DisplayValues, display_values
from .exceptions import FetchError, NetworkError, ParseError
from .fetcher import SensorFetcher, parse_payload
from .poll_loop import LoopState, PollLoop
from .state import FetchFailure, StateStore, StoreStatus

__all__ = [
    "AirQuality",
    "Co2Status",
    "DisplayValues",
    "display_values",
    "FetchError",
    "NetworkError",
    "ParseError",
    "SensorFetcher",
    "parse_payload",
    "LoopState",
    "PollLoop",
    "FetchFailure",
    "StateStore",
    "StoreStatus",
]
