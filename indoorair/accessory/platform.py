"""Dynamic platform exposing the air sensor as a cached platform accessory."""

import logging
from typing import Dict, Optional

from indoorair.poller.state import StateStore
from .hap import Characteristic, HostAccessory, HostAPI, ServiceType
from .services import AccessoryInformation, SensorServices

logger = logging.getLogger(__name__)


class IndoorAirPlatformAccessory:
    """Wires one platform accessory's services to the state store.

    Services already present on a restored accessory are reused rather than
    added a second time.
    """

    def __init__(
        self,
        accessory: HostAccessory,
        store: StateStore,
        information: AccessoryInformation,
    ):
        self.accessory = accessory

        self.information_service = information.apply(
            accessory.get_or_add_service(ServiceType.ACCESSORY_INFORMATION)
        )

        co2 = accessory.get_or_add_service(ServiceType.CARBON_DIOXIDE_SENSOR)
        air_quality = accessory.get_or_add_service(ServiceType.AIR_QUALITY_SENSOR)
        temperature = accessory.get_or_add_service(ServiceType.TEMPERATURE_SENSOR)
        humidity = accessory.get_or_add_service(ServiceType.HUMIDITY_SENSOR)

        # Default names shown in the Home app
        co2.set_characteristic(Characteristic.NAME, "CO2")
        air_quality.set_characteristic(Characteristic.NAME, "Air Quality")
        temperature.set_characteristic(Characteristic.NAME, "Temperature")
        humidity.set_characteristic(Characteristic.NAME, "Humidity")

        self.sensors = SensorServices(
            store,
            co2_service=co2,
            air_quality_service=air_quality,
            temperature_service=temperature,
            humidity_service=humidity,
        ).bind()


class IndoorAirPlatform:
    """Registers the sensor accessory with the host, reusing a cached one if present."""

    def __init__(
        self,
        host: HostAPI,
        store: StateStore,
        name: str,
        information: Optional[AccessoryInformation] = None,
    ):
        self.host = host
        self.store = store
        self.name = name
        self.information = information or AccessoryInformation()
        self.accessories: Dict[str, HostAccessory] = {}

        for accessory in host.cached_accessories():
            self.configure_accessory(accessory)

    def configure_accessory(self, accessory: HostAccessory) -> None:
        """Called for each accessory the host restored from its cache."""
        logger.info(f"Loading accessory from cache: {accessory.display_name}")
        self.accessories[accessory.uuid] = accessory

    def discover_devices(self) -> IndoorAirPlatformAccessory:
        """Set up the sensor accessory, registering it if the host does not know it yet."""
        accessory_uuid = self.host.generate_uuid(self.name)
        accessory = self.accessories.get(accessory_uuid)

        if accessory is not None:
            logger.info(f"Restoring existing accessory from cache: {accessory.display_name}")
            return IndoorAirPlatformAccessory(accessory, self.store, self.information)

        logger.info(f"Adding new accessory: {self.name}")
        accessory = self.host.create_accessory(self.name, accessory_uuid)
        handler = IndoorAirPlatformAccessory(accessory, self.store, self.information)
        self.accessories[accessory_uuid] = accessory
        self.host.register_accessories([accessory])
        return handler
