"""Indoor air bridge - exposes the air sensor to an MQTT home automation host."""

__version__ = "0.1.0"

from .bridge_service import IndoorAirBridge
from .mqtt_host import MQTTHost


def main():
    """Entry point for the indoor air bridge service."""
    from .bridge_service import run_bridge

    run_bridge()


__all__ = ["IndoorAirBridge", "MQTTHost", "main"]
