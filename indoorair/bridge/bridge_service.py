"""Indoor air bridge service - main orchestrator."""

import asyncio
import logging
import signal
import sys
from typing import Optional, Union

from indoorair.accessory.accessory import IndoorAirAccessory
from indoorair.accessory.platform import IndoorAirPlatform, IndoorAirPlatformAccessory
from indoorair.poller.fetcher import SensorFetcher
from indoorair.poller.poll_loop import PollLoop
from indoorair.poller.state import StateStore
from indoorair.shared.logging import setup_logging
from .config import BridgeConfig, load_config
from .mqtt_host import MQTTHost

logger = logging.getLogger(__name__)


class IndoorAirBridge:
    """Polls the air sensor and exposes it through an MQTT host."""

    def __init__(self, config: BridgeConfig, host: Optional[MQTTHost] = None):
        """Initialize the bridge service.

        Args:
            config: Configuration object.
            host: Host to expose the accessory through. Built from the MQTT
                settings in config when omitted.
        """
        self.config = config
        self.host = host or MQTTHost(config.mqtt, base_topic=config.base_topic)
        self.store = StateStore()
        self.poll_loop = PollLoop(
            SensorFetcher(config.url, timeout=config.fetch_timeout),
            self.store,
            polling_interval_ms=config.polling_interval_ms,
            fetch_timeout=config.fetch_timeout,
        )
        self.accessory: Optional[Union[IndoorAirAccessory, IndoorAirPlatformAccessory]] = None
        self._running = False

    def setup_accessory(self) -> Union[IndoorAirAccessory, IndoorAirPlatformAccessory]:
        """Create the accessory for the configured mode and hook it to the poll loop."""
        if self.config.mode == "accessory":
            accessory = IndoorAirAccessory(
                self.host, self.store, self.config.name, self.config.information
            )
        else:
            platform = IndoorAirPlatform(
                self.host, self.store, self.config.name, self.config.information
            )
            accessory = platform.discover_devices()

        self.poll_loop.add_listener(accessory.sensors.push)
        self.accessory = accessory
        return accessory

    def _setup_signal_handlers(self):
        """Set up signal handlers for graceful shutdown."""
        def signal_handler(signum, frame):
            signame = signal.Signals(signum).name
            logger.info(f"Received {signame}, shutting down...")
            self._running = False

        signal.signal(signal.SIGTERM, signal_handler)
        signal.signal(signal.SIGINT, signal_handler)

    async def run(self):
        """Run the bridge service (blocking)."""
        self._setup_signal_handlers()
        self._running = True
        self.host.loop = asyncio.get_running_loop()

        if not self.host.connect():
            logger.error("Failed to connect to MQTT broker")
            return

        self.setup_accessory()
        logger.info(f"Polling interval is {self.config.polling_interval_ms} ms")
        self.poll_loop.start()

        logger.info("Indoor air bridge is running. Press Ctrl+C to stop.")
        try:
            while self._running:
                await asyncio.sleep(1.0)
        except asyncio.CancelledError:
            pass

        logger.info("Shutting down indoor air bridge...")
        await self.poll_loop.stop()
        self.host.disconnect()
        logger.info("Indoor air bridge stopped.")


def run_bridge(config_path: Optional[str] = None):
    """Run the indoor air bridge service.

    Args:
        config_path: Optional path to config file.
    """
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(config.log_level)
    logger.info(f"Starting indoor air bridge for {config.name} ({config.url})...")

    bridge = IndoorAirBridge(config)

    try:
        asyncio.run(bridge.run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
