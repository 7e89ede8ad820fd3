"""Classification of sensor readings into HomeKit characteristic values.

Everything here is pure: classifications are computed from a reading when a
host asks for them and are never stored. Enum values match the numeric
values of the corresponding HomeKit characteristics.
"""

import math
from dataclasses import dataclass
from enum import IntEnum

from indoorair.shared.models import SensorReading

# Above this the CarbonDioxideDetected characteristic reports abnormal levels.
CO2_ABNORMAL_THRESHOLD_PPM = 1000


class Co2Status(IntEnum):
    """CarbonDioxideDetected values."""
    NORMAL = 0
    ABNORMAL = 1


class AirQuality(IntEnum):
    """AirQuality values."""
    UNKNOWN = 0
    EXCELLENT = 1
    GOOD = 2
    FAIR = 3
    INFERIOR = 4
    POOR = 5


def co2_status(reading: SensorReading) -> Co2Status:
    if reading.eco2 <= CO2_ABNORMAL_THRESHOLD_PPM:
        return Co2Status.NORMAL
    return Co2Status.ABNORMAL


def air_quality_for_index(aqi: float) -> AirQuality:
    """Map an air quality index to a bucket.

    1-4 map one to one, anything from 5 upwards is POOR. Zero, negative
    and fractional indexes below 5 are UNKNOWN.
    """
    if aqi == 1:
        return AirQuality.EXCELLENT
    elif aqi == 2:
        return AirQuality.GOOD
    elif aqi == 3:
        return AirQuality.FAIR
    elif aqi == 4:
        return AirQuality.INFERIOR
    elif aqi >= 5:
        return AirQuality.POOR
    return AirQuality.UNKNOWN


def air_quality_bucket(reading: SensorReading) -> AirQuality:
    return air_quality_for_index(reading.aqi)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's round() rounds halves to even, so 44.5 would become 44.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class DisplayValues:
    """Characteristic values derived from one reading."""
    co2_detected: Co2Status
    co2_level: int
    air_quality: AirQuality
    voc_density: int
    temperature: float
    humidity: int


def display_values(reading: SensorReading) -> DisplayValues:
    """Classify and round a reading for presentation.

    The reading itself keeps full precision; only the returned values are
    rounded.
    """
    return DisplayValues(
        co2_detected=co2_status(reading),
        co2_level=round_half_up(reading.eco2),
        air_quality=air_quality_bucket(reading),
        voc_density=round_half_up(reading.tvoc),
        temperature=reading.temperature,
        humidity=round_half_up(reading.humidity),
    )
