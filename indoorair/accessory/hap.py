"""Interface the home automation host offers to accessories.

The host owns the accessory protocol. Accessories only create services,
register query handlers and push characteristic values through the handle
they are given; they never reach for host state on their own.
"""

import uuid
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, List, Optional

# Handlers return the value directly or an awaitable resolving to it.
GetHandler = Callable[[], Any]

UUID_NAMESPACE = uuid.UUID("6f1c2d0e-4b7a-5c39-9e2f-1a8d3c5b7e40")


class ServiceType(Enum):
    """HomeKit service types used by the air sensor."""
    ACCESSORY_INFORMATION = "AccessoryInformation"
    CARBON_DIOXIDE_SENSOR = "CarbonDioxideSensor"
    AIR_QUALITY_SENSOR = "AirQualitySensor"
    TEMPERATURE_SENSOR = "TemperatureSensor"
    HUMIDITY_SENSOR = "HumiditySensor"


class Characteristic(Enum):
    """HomeKit characteristics used by the air sensor."""
    NAME = "Name"
    MANUFACTURER = "Manufacturer"
    MODEL = "Model"
    SERIAL_NUMBER = "SerialNumber"
    CARBON_DIOXIDE_DETECTED = "CarbonDioxideDetected"
    CARBON_DIOXIDE_LEVEL = "CarbonDioxideLevel"
    AIR_QUALITY = "AirQuality"
    VOC_DENSITY = "VOCDensity"
    CURRENT_TEMPERATURE = "CurrentTemperature"
    CURRENT_RELATIVE_HUMIDITY = "CurrentRelativeHumidity"


class HostService(ABC):
    """A service instance managed by the host."""

    def __init__(self, service_type: ServiceType, display_name: str):
        self.service_type = service_type
        self.display_name = display_name

    @abstractmethod
    def on_get(self, characteristic: Characteristic, handler: GetHandler) -> "HostService":
        """Register the handler answering reads of a characteristic."""
        pass

    @abstractmethod
    def set_characteristic(self, characteristic: Characteristic, value: Any) -> "HostService":
        """Set a static value such as a name or serial number."""
        pass

    @abstractmethod
    def update_characteristic(self, characteristic: Characteristic, value: Any) -> "HostService":
        """Push a new value so the host can notify connected clients."""
        pass


class HostAccessory(ABC):
    """A platform accessory: a named container of services."""

    def __init__(self, display_name: str, uuid: str):
        self.display_name = display_name
        self.uuid = uuid

    @abstractmethod
    def get_service(self, service_type: ServiceType) -> Optional[HostService]:
        pass

    @abstractmethod
    def add_service(self, service_type: ServiceType, display_name: Optional[str] = None) -> HostService:
        pass

    def get_or_add_service(self, service_type: ServiceType, display_name: Optional[str] = None) -> HostService:
        return self.get_service(service_type) or self.add_service(service_type, display_name)


class HostAPI(ABC):
    """Capability handle passed to every accessory adapter."""

    @abstractmethod
    def create_service(self, service_type: ServiceType, display_name: str) -> HostService:
        """Create a standalone service for a static accessory."""
        pass

    @abstractmethod
    def create_accessory(self, display_name: str, uuid: str) -> HostAccessory:
        """Create a platform accessory that is not registered yet."""
        pass

    @abstractmethod
    def register_accessories(self, accessories: List[HostAccessory]) -> None:
        """Publish newly created platform accessories."""
        pass

    def cached_accessories(self) -> List[HostAccessory]:
        """Accessories restored from a previous run. Hosts without a cache return none."""
        return []

    def generate_uuid(self, name: str) -> str:
        """Stable identifier for an accessory name."""
        return str(uuid.uuid5(UUID_NAMESPACE, name))
