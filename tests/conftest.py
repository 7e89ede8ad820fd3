"""Shared fixtures for indoor air tests."""

from __future__ import annotations

from typing import Any, Dict

import pytest

from indoorair.poller.state import StateStore
from indoorair.shared.models import SensorReading

from .fakes import SAMPLE_PAYLOAD, FakeClock, FakeHost


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    return dict(SAMPLE_PAYLOAD)


@pytest.fixture
def sample_reading() -> SensorReading:
    return SensorReading(**SAMPLE_PAYLOAD)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> StateStore:
    return StateStore(clock=clock)


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()
