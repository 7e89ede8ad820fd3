"""Tests for reading classification and display rounding."""

import pytest

from indoorair.poller.classifier import (
    AirQuality,
    Co2Status,
    air_quality_bucket,
    air_quality_for_index,
    co2_status,
    display_values,
    round_half_up,
)
from indoorair.shared.models import SensorReading, ZERO_READING


@pytest.mark.parametrize("eco2", [0, 400, 999.9, 1000])
def test_co2_at_or_below_threshold_is_normal(eco2):
    assert co2_status(SensorReading(eco2=eco2)) == Co2Status.NORMAL


@pytest.mark.parametrize("eco2", [1000.1, 1001, 5000])
def test_co2_above_threshold_is_abnormal(eco2):
    assert co2_status(SensorReading(eco2=eco2)) == Co2Status.ABNORMAL


@pytest.mark.parametrize(
    "aqi, expected",
    [
        (1, AirQuality.EXCELLENT),
        (2, AirQuality.GOOD),
        (3, AirQuality.FAIR),
        (4, AirQuality.INFERIOR),
        (5, AirQuality.POOR),
        (100, AirQuality.POOR),
        (0, AirQuality.UNKNOWN),
        (-1, AirQuality.UNKNOWN),
    ],
)
def test_air_quality_for_index(aqi, expected):
    assert air_quality_for_index(aqi) == expected


def test_air_quality_bucket_reads_aqi_from_reading():
    assert air_quality_bucket(SensorReading(aqi=3)) == AirQuality.FAIR


def test_enum_values_match_homekit():
    assert int(Co2Status.NORMAL) == 0
    assert int(Co2Status.ABNORMAL) == 1
    assert [int(q) for q in AirQuality] == [0, 1, 2, 3, 4, 5]


@pytest.mark.parametrize(
    "value, expected",
    [(45.2, 45), (44.5, 45), (45.5, 46), (0.4, 0), (-2.5, -3), (1500, 1500)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_display_values_round_only_presented_fields():
    reading = SensorReading(eco2=812.6, tvoc=120.5, temperature=21.46, humidity=45.2, aqi=2)

    values = display_values(reading)

    assert values.co2_level == 813
    assert values.voc_density == 121
    assert values.humidity == 45
    assert values.temperature == 21.46
    assert values.air_quality == AirQuality.GOOD
    # the reading keeps full precision
    assert reading.humidity == 45.2


def test_zero_reading_reports_neutral_values():
    values = display_values(ZERO_READING)

    assert values.co2_detected == Co2Status.NORMAL
    assert values.co2_level == 0
    assert values.air_quality == AirQuality.UNKNOWN
    assert values.humidity == 0
