"""Characteristic wiring shared by the accessory and platform adapters."""

import logging
from dataclasses import dataclass
from typing import List

from indoorair.poller.classifier import display_values
from indoorair.poller.state import StateStore
from indoorair.shared.models import SensorReading
from .hap import Characteristic, HostService

logger = logging.getLogger(__name__)


@dataclass
class AccessoryInformation:
    """Static values for the AccessoryInformation service."""
    manufacturer: str = "Chassot"
    model: str = "Air Sensor"
    serial_number: str = "42424242-4242"

    @classmethod
    def from_dict(cls, data: dict) -> "AccessoryInformation":
        return cls(
            manufacturer=str(data.get("manufacturer", "Chassot")),
            model=str(data.get("model", "Air Sensor")),
            serial_number=str(data.get("serial_number", "42424242-4242")),
        )

    def apply(self, service: HostService) -> HostService:
        return (
            service.set_characteristic(Characteristic.MANUFACTURER, self.manufacturer)
            .set_characteristic(Characteristic.MODEL, self.model)
            .set_characteristic(Characteristic.SERIAL_NUMBER, self.serial_number)
        )


class SensorServices:
    """Answers host queries from the state store and pushes fresh readings.

    Query handlers only read the latest committed snapshot, so they return
    immediately even while a fetch is in flight.
    """

    def __init__(
        self,
        store: StateStore,
        co2_service: HostService,
        air_quality_service: HostService,
        temperature_service: HostService,
        humidity_service: HostService,
    ):
        self.store = store
        self.co2_service = co2_service
        self.air_quality_service = air_quality_service
        self.temperature_service = temperature_service
        self.humidity_service = humidity_service

    @property
    def services(self) -> List[HostService]:
        return [
            self.co2_service,
            self.air_quality_service,
            self.temperature_service,
            self.humidity_service,
        ]

    def bind(self) -> "SensorServices":
        """Register a query handler for every sensor characteristic."""
        self.co2_service.on_get(Characteristic.CARBON_DIOXIDE_DETECTED, self.handle_co2_detected_get)
        self.co2_service.on_get(Characteristic.CARBON_DIOXIDE_LEVEL, self.handle_co2_level_get)
        self.air_quality_service.on_get(Characteristic.AIR_QUALITY, self.handle_air_quality_get)
        self.air_quality_service.on_get(Characteristic.VOC_DENSITY, self.handle_voc_density_get)
        self.temperature_service.on_get(
            Characteristic.CURRENT_TEMPERATURE, self.handle_current_temperature_get
        )
        self.humidity_service.on_get(
            Characteristic.CURRENT_RELATIVE_HUMIDITY, self.handle_current_relative_humidity_get
        )
        return self

    def handle_co2_detected_get(self):
        value = display_values(self.store.snapshot()).co2_detected
        logger.debug(f"GET CarbonDioxideDetected -> {value.name}")
        return value

    def handle_co2_level_get(self) -> int:
        value = display_values(self.store.snapshot()).co2_level
        logger.debug(f"GET CarbonDioxideLevel -> {value}")
        return value

    def handle_air_quality_get(self):
        value = display_values(self.store.snapshot()).air_quality
        logger.debug(f"GET AirQuality -> {value.name}")
        return value

    def handle_voc_density_get(self) -> int:
        value = display_values(self.store.snapshot()).voc_density
        logger.debug(f"GET VOCDensity -> {value}")
        return value

    def handle_current_temperature_get(self) -> float:
        value = display_values(self.store.snapshot()).temperature
        logger.debug(f"GET CurrentTemperature -> {value}")
        return value

    def handle_current_relative_humidity_get(self) -> int:
        value = display_values(self.store.snapshot()).humidity
        logger.debug(f"GET CurrentRelativeHumidity -> {value}")
        return value

    def push(self, reading: SensorReading) -> None:
        """Send every characteristic of a new reading to the host."""
        values = display_values(reading)
        self.co2_service.update_characteristic(Characteristic.CARBON_DIOXIDE_LEVEL, values.co2_level)
        self.co2_service.update_characteristic(Characteristic.CARBON_DIOXIDE_DETECTED, values.co2_detected)
        self.air_quality_service.update_characteristic(Characteristic.AIR_QUALITY, values.air_quality)
        self.air_quality_service.update_characteristic(Characteristic.VOC_DENSITY, values.voc_density)
        self.temperature_service.update_characteristic(Characteristic.CURRENT_TEMPERATURE, values.temperature)
        self.humidity_service.update_characteristic(Characteristic.CURRENT_RELATIVE_HUMIDITY, values.humidity)
