"""Core data models for sensor readings."""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class SensorReading:
    """One parsed snapshot of the air sensor.

    Field names follow the sensor's JSON payload. Every field defaults to
    zero, which is what an accessory reports before its first successful
    fetch.
    """
    eco2: float = 0.0  # ppm
    tvoc: float = 0.0  # ppb
    temperature: float = 0.0  # C
    humidity: float = 0.0  # % RH
    pressure: float = 0.0  # hPa
    gas_kohms: float = 0.0
    aqi: int = 0

    def is_empty(self) -> bool:
        """Check if this is the zero reading."""
        return self == ZERO_READING

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the payload field names."""
        return asdict(self)


ZERO_READING = SensorReading()
