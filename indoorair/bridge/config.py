"""Configuration for the indoor air bridge."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from indoorair.accessory.services import AccessoryInformation
from indoorair.shared.config import apply_env_overrides, get_config_path, load_yaml_config
from indoorair.shared.mqtt import MQTTConfig

MODES = ("platform", "accessory")

ENV_OVERRIDES = {
    "url": "INDOOR_AIR_URL",
    "polling_interval_ms": "INDOOR_AIR_POLLING_INTERVAL_MS",
    "mqtt.broker": "MQTT_BROKER",
    "log_level": "LOG_LEVEL",
}


def _positive_int(data: dict, key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; floats must be whole numbers
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    if number <= 0:
        raise ValueError(f"{key} must be greater than 0, got {number}")
    return number


@dataclass
class BridgeConfig:
    """Configuration for one air sensor accessory."""

    url: str
    polling_interval_ms: int
    name: str = "Indoor Air Sensor"
    mode: str = "platform"
    fetch_timeout_ms: Optional[int] = None
    information: AccessoryInformation = field(default_factory=AccessoryInformation)

    # MQTT host settings
    mqtt: MQTTConfig = field(default_factory=MQTTConfig)
    base_topic: str = "homebridge"

    log_level: str = "INFO"

    @property
    def fetch_timeout(self) -> float:
        """Fetch timeout in seconds; half the polling interval unless configured."""
        if self.fetch_timeout_ms is not None:
            return self.fetch_timeout_ms / 1000.0
        return self.polling_interval_ms / 2000.0

    @classmethod
    def from_dict(cls, data: dict) -> "BridgeConfig":
        """Create config from dictionary.

        Accepts pollingIntervalMS as an alias for polling_interval_ms, the
        key used by existing Homebridge configurations.

        Raises:
            ValueError: If a required key is missing or a value is invalid.
        """
        url = data.get("url")
        if not url:
            raise ValueError("url is required")

        if "polling_interval_ms" not in data and "pollingIntervalMS" in data:
            data = dict(data, polling_interval_ms=data["pollingIntervalMS"])
        polling_interval_ms = _positive_int(data, "polling_interval_ms")
        if polling_interval_ms is None:
            raise ValueError("polling_interval_ms is required")

        fetch_timeout_ms = _positive_int(data, "fetch_timeout_ms")
        if fetch_timeout_ms is not None and fetch_timeout_ms >= polling_interval_ms:
            raise ValueError(
                f"fetch_timeout_ms ({fetch_timeout_ms}) must be shorter than "
                f"polling_interval_ms ({polling_interval_ms})"
            )

        mode = data.get("mode", "platform")
        if mode not in MODES:
            raise ValueError(f"mode must be one of {', '.join(MODES)}, got {mode!r}")

        return cls(
            url=str(url),
            polling_interval_ms=polling_interval_ms,
            name=data.get("name") or "Indoor Air Sensor",
            mode=mode,
            fetch_timeout_ms=fetch_timeout_ms,
            information=AccessoryInformation.from_dict(data.get("information") or {}),
            mqtt=MQTTConfig.from_dict(data.get("mqtt") or {}),
            base_topic=str(data.get("base_topic") or "homebridge").strip("/"),
            log_level=str(data.get("log_level") or "INFO").upper(),
        )


def load_config(config_path: Optional[Union[str, Path]] = None) -> BridgeConfig:
    """Load configuration from YAML file and environment.

    Args:
        config_path: Path to YAML config file. If not provided, looks for
                    INDOOR_AIR_CONFIG env var, then the repo's config
                    directory.

    Returns:
        BridgeConfig instance.
    """
    if config_path is None:
        config_path = os.environ.get("INDOOR_AIR_CONFIG") or get_config_path()

    data = load_yaml_config(config_path)
    return BridgeConfig.from_dict(apply_env_overrides(data, ENV_OVERRIDES))
