"""Shared utilities for indoor air services."""

from .models import SensorReading, ZERO_READING
from .config import load_yaml_config, get_config_path
from .mqtt import MQTTConfig
from .logging import setup_logging

__all__ = [
    "SensorReading",
    "ZERO_READING",
    "load_yaml_config",
    "get_config_path",
    "MQTTConfig",
    "setup_logging",
]
