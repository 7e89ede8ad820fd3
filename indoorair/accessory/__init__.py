"""Accessory adapters over the polling core."""

from .accessory import IndoorAirAccessory
from .hap import Characteristic, HostAccessory, HostAPI, HostService, ServiceType
from .platform import IndoorAirPlatform, IndoorAirPlatformAccessory
from .services import AccessoryInformation, SensorServices

__all__ = [
    "IndoorAirAccessory",
    "IndoorAirPlatform",
    "IndoorAirPlatformAccessory",
    "AccessoryInformation",
    "SensorServices",
    "Characteristic",
    "HostAccessory",
    "HostAPI",
    "HostService",
    "ServiceType",
]
