"""Single static accessory exposing the air sensor services."""

import logging
from typing import List, Optional

from indoorair.poller.state import StateStore
from .hap import HostAPI, HostService, ServiceType
from .services import AccessoryInformation, SensorServices

logger = logging.getLogger(__name__)


class IndoorAirAccessory:
    """Static accessory: the host asks for its services once at startup."""

    def __init__(
        self,
        host: HostAPI,
        store: StateStore,
        name: str,
        information: Optional[AccessoryInformation] = None,
    ):
        """
        Args:
            host: Host handle used to create services.
            store: State store the query handlers read from.
            name: Display name prefix for every service.
            information: Manufacturer, model and serial number.
        """
        self.name = name
        self.information = information or AccessoryInformation()

        self.information_service = self.information.apply(
            host.create_service(ServiceType.ACCESSORY_INFORMATION, name)
        )
        self.sensors = SensorServices(
            store,
            co2_service=host.create_service(ServiceType.CARBON_DIOXIDE_SENSOR, f"{name} CO2 Sensor"),
            air_quality_service=host.create_service(
                ServiceType.AIR_QUALITY_SENSOR, f"{name} Air Quality Sensor"
            ),
            temperature_service=host.create_service(
                ServiceType.TEMPERATURE_SENSOR, f"{name} Temperature Sensor"
            ),
            humidity_service=host.create_service(ServiceType.HUMIDITY_SENSOR, f"{name} Humidity Sensor"),
        ).bind()

        logger.info(f"{name} finished initializing")

    def identify(self) -> None:
        """Called by the host when a user asks the accessory to identify itself."""
        logger.info(f"Identify requested for {self.name}")

    def get_services(self) -> List[HostService]:
        return [self.information_service] + self.sensors.services
