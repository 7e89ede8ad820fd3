"""MQTT configuration and payload helpers."""

import json
import re
import time
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class MQTTConfig:
    """MQTT broker configuration."""
    broker: str = "localhost"
    port: int = 1883
    client_id: str = "indoorair-bridge"
    keepalive: int = 60
    qos: int = 1

    @classmethod
    def from_dict(cls, data: dict) -> "MQTTConfig":
        """Create config from dictionary."""
        return cls(
            broker=data.get("broker", "localhost"),
            port=int(data.get("port", 1883)),
            client_id=data.get("client_id", "indoorair-bridge"),
            keepalive=int(data.get("keepalive", 60)),
            qos=int(data.get("qos", 1)),
        )


def topic_segment(name: str) -> str:
    """Turn a display name into a single MQTT topic level.

    "Indoor Air Sensor CO2 Sensor" -> "indoor-air-sensor-co2-sensor"
    """
    segment = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return segment or "unnamed"


def create_characteristic_payload(
    value: Any,
    service: str,
    characteristic: str,
    timestamp: Optional[float] = None,
) -> str:
    """Create a standardized MQTT payload for a characteristic value.

    Args:
        value: The characteristic value (number, string or enum member).
        service: Display name of the owning service.
        characteristic: Characteristic name (e.g. 'CarbonDioxideLevel').
        timestamp: Unix timestamp (defaults to current time).

    Returns:
        JSON string payload.
    """
    return json.dumps({
        "value": value,
        "ts": timestamp or time.time(),
        "service": service,
        "characteristic": characteristic,
    })

