"""Home automation host backed by an MQTT broker.

Characteristic values are published retained to
``{base_topic}/{accessory}/{service}/{Characteristic}``. Publishing anything
to that topic with ``/get`` appended runs the registered query handler and
publishes its answer.
"""

import asyncio
import inspect
import json
import logging
import threading
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import paho.mqtt.client as mqtt
from paho.mqtt.enums import CallbackAPIVersion

from indoorair.accessory.hap import (
    Characteristic,
    GetHandler,
    HostAccessory,
    HostAPI,
    HostService,
    ServiceType,
)
from indoorair.shared.mqtt import MQTTConfig, create_characteristic_payload, topic_segment

logger = logging.getLogger(__name__)


def _wire_value(value: Any) -> Any:
    # IntEnum members serialize as their numeric value
    if isinstance(value, Enum):
        return value.value
    return value


class MQTTService(HostService):
    """A service whose characteristics live under one topic prefix."""

    def __init__(self, host: "MQTTHost", service_type: ServiceType, display_name: str, prefix: str):
        super().__init__(service_type, display_name)
        self.host = host
        self.prefix = prefix
        self.values: Dict[Characteristic, Any] = {}
        self.handlers: Dict[Characteristic, GetHandler] = {}

    def topic(self, characteristic: Characteristic) -> str:
        return f"{self.prefix}/{characteristic.value}"

    def on_get(self, characteristic: Characteristic, handler: GetHandler) -> "MQTTService":
        self.handlers[characteristic] = handler
        self.host._register_get(self, characteristic)
        return self

    def set_characteristic(self, characteristic: Characteristic, value: Any) -> "MQTTService":
        self.values[characteristic] = _wire_value(value)
        self.host.publish_value(self, characteristic, self.values[characteristic])
        return self

    def update_characteristic(self, characteristic: Characteristic, value: Any) -> "MQTTService":
        return self.set_characteristic(characteristic, value)


class MQTTAccessory(HostAccessory):
    """A platform accessory whose services share the accessory's topic level."""

    def __init__(self, host: "MQTTHost", display_name: str, uuid: str):
        super().__init__(display_name, uuid)
        self.host = host
        self.services: Dict[ServiceType, MQTTService] = {}

    def get_service(self, service_type: ServiceType) -> Optional[MQTTService]:
        return self.services.get(service_type)

    def add_service(self, service_type: ServiceType, display_name: Optional[str] = None) -> MQTTService:
        if service_type in self.services:
            raise ValueError(f"{self.display_name} already has a {service_type.value} service")

        display_name = display_name or self.display_name
        prefix = f"{self.host.base_topic}/{topic_segment(self.display_name)}/{topic_segment(service_type.value)}"
        service = MQTTService(self.host, service_type, display_name, prefix)
        self.services[service_type] = service
        return service

    def describe(self) -> Dict[str, Any]:
        """Summary announced when the accessory is registered."""
        return {
            "name": self.display_name,
            "uuid": self.uuid,
            "services": [
                {
                    "type": service.service_type.value,
                    "name": service.display_name,
                    "topic": service.prefix,
                    "characteristics": sorted(
                        c.value for c in set(service.values) | set(service.handlers)
                    ),
                }
                for service in self.services.values()
            ],
        }


class MQTTHost(HostAPI):
    """Exposes accessories to an MQTT-based home automation bridge."""

    def __init__(self, config: MQTTConfig, base_topic: str = "homebridge"):
        """
        Args:
            config: MQTT broker configuration.
            base_topic: Topic level every accessory is published under.
        """
        self.config = config
        self.base_topic = base_topic.strip("/")
        self.client: Optional[mqtt.Client] = None
        self.accessories: List[MQTTAccessory] = []
        self.loop: Optional[asyncio.AbstractEventLoop] = None

        self._connected = False
        self._connect_event = threading.Event()
        self._get_topics: Dict[str, Tuple[MQTTService, Characteristic]] = {}

    # HostAPI

    def create_service(self, service_type: ServiceType, display_name: str) -> MQTTService:
        prefix = f"{self.base_topic}/{topic_segment(display_name)}"
        return MQTTService(self, service_type, display_name, prefix)

    def create_accessory(self, display_name: str, uuid: str) -> MQTTAccessory:
        return MQTTAccessory(self, display_name, uuid)

    def register_accessories(self, accessories: List[HostAccessory]) -> None:
        for accessory in accessories:
            if not isinstance(accessory, MQTTAccessory):
                raise TypeError(f"Expected MQTTAccessory, got {type(accessory)}")
            self.accessories.append(accessory)
            logger.info(f"Registered accessory {accessory.display_name} ({accessory.uuid})")
        if self._connected:
            self._announce_accessories()

    # Connection handling

    def _on_connect(self, client, userdata, flags, reason_code, properties):
        """Handle connection to broker."""
        if reason_code == 0:
            logger.info(f"Connected to MQTT broker at {self.config.broker}:{self.config.port}")
            self._connected = True
            for topic in self._get_topics:
                client.subscribe(topic, qos=self.config.qos)
            self._announce_accessories()
        else:
            logger.error(f"Failed to connect to MQTT broker: {reason_code}")
            self._connected = False
        self._connect_event.set()

    def _on_disconnect(self, client, userdata, disconnect_flags, reason_code, properties):
        """Handle disconnection from broker."""
        self._connected = False
        if reason_code != 0:
            logger.warning(f"Unexpected MQTT disconnection (reason={reason_code})")
        else:
            logger.info("Disconnected from MQTT broker")

    def connect(self, timeout: float = 10.0) -> bool:
        """Connect to the MQTT broker.

        Args:
            timeout: Timeout in seconds to wait for connection.

        Returns:
            True if connected successfully, False otherwise.
        """
        self._connect_event.clear()

        self.client = mqtt.Client(
            callback_api_version=CallbackAPIVersion.VERSION2,
            client_id=self.config.client_id,
        )
        self.client.on_connect = self._on_connect
        self.client.on_disconnect = self._on_disconnect
        self.client.on_message = self._on_message

        logger.info(f"Connecting to MQTT broker at {self.config.broker}:{self.config.port}")

        try:
            self.client.connect(self.config.broker, self.config.port, keepalive=self.config.keepalive)
            self.client.loop_start()

            if self._connect_event.wait(timeout=timeout):
                return self._connected
            else:
                logger.error("Timeout waiting for MQTT connection")
                return False
        except Exception as e:
            logger.error(f"Failed to connect to MQTT broker: {e}")
            return False

    def disconnect(self):
        """Disconnect from the MQTT broker."""
        if self.client:
            self.client.loop_stop()
            self.client.disconnect()
            self.client = None
            self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    # Publishing

    def _publish(self, topic: str, payload: str, retain: bool = True) -> bool:
        if not self._connected or not self.client:
            logger.warning(f"Not connected to MQTT broker, dropping {topic}")
            return False

        result = self.client.publish(topic, payload, qos=self.config.qos, retain=retain)
        if result.rc == mqtt.MQTT_ERR_SUCCESS:
            logger.debug(f"Published to {topic}: {payload}")
            return True
        logger.warning(f"Failed to publish to {topic}: rc={result.rc}")
        return False

    def publish_value(self, service: MQTTService, characteristic: Characteristic, value: Any) -> bool:
        payload = create_characteristic_payload(
            value=_wire_value(value),
            service=service.display_name,
            characteristic=characteristic.value,
        )
        return self._publish(service.topic(characteristic), payload)

    def _announce_accessories(self) -> None:
        for accessory in self.accessories:
            topic = f"{self.base_topic}/{topic_segment(accessory.display_name)}/$accessory"
            self._publish(topic, json.dumps(accessory.describe()))

    # Query handling

    def _register_get(self, service: MQTTService, characteristic: Characteristic) -> None:
        topic = f"{service.topic(characteristic)}/get"
        self._get_topics[topic] = (service, characteristic)
        if self._connected and self.client:
            self.client.subscribe(topic, qos=self.config.qos)

    def _on_message(self, client, userdata, msg: mqtt.MQTTMessage):
        """Answer a get request on the paho network thread."""
        target = self._get_topics.get(msg.topic)
        if target is None:
            logger.debug(f"Ignoring message on {msg.topic}")
            return

        service, characteristic = target
        try:
            self.handle_get(service, characteristic)
        except Exception as e:
            logger.error(f"Error answering {msg.topic}: {e}")

    def handle_get(self, service: MQTTService, characteristic: Characteristic) -> None:
        """Run a query handler and publish its value.

        Coroutine handlers are scheduled on the bridge's event loop and
        published when they complete.
        """
        handler = service.handlers[characteristic]
        result = handler()

        if not inspect.iscoroutine(result):
            self.publish_value(service, characteristic, result)
            return

        if self.loop is None:
            raise RuntimeError(f"No event loop to run async handler for {characteristic.value}")

        future = asyncio.run_coroutine_threadsafe(result, self.loop)

        def done(fut):
            try:
                self.publish_value(service, characteristic, fut.result())
            except Exception as e:
                logger.error(f"Async handler for {characteristic.value} failed: {e}")

        future.add_done_callback(done)
