"""Tests for the state store."""

import threading

import pytest

from indoorair.poller.exceptions import NetworkError, ParseError
from indoorair.poller.state import StateStore
from indoorair.shared.models import SensorReading, ZERO_READING


def test_new_store_holds_zero_reading(store):
    status = store.status()

    assert store.snapshot() == ZERO_READING
    assert store.snapshot().is_empty()
    assert status.last_updated is None
    assert status.last_error is None
    assert not status.has_data


def test_update_then_snapshot_returns_same_reading(store, sample_reading, clock):
    store.update(sample_reading)

    assert store.snapshot() == sample_reading
    assert store.last_updated == clock.now


def test_update_rejects_non_readings(store):
    with pytest.raises(TypeError):
        store.update({"eco2": 400})


def test_record_error_keeps_previous_reading(store, sample_reading, clock):
    store.update(sample_reading)
    clock.now += 30

    store.record_error(ParseError("Response is not valid JSON"))

    status = store.status()
    assert store.snapshot() == sample_reading
    assert status.last_error.kind == "parse"
    assert status.last_error.message == "Response is not valid JSON"
    assert status.last_error.timestamp == clock.now
    assert status.consecutive_failures == 1


def test_consecutive_failures_reset_on_update(store, sample_reading):
    store.record_error(NetworkError("refused"))
    store.record_error(NetworkError("refused"))
    assert store.status().consecutive_failures == 2

    store.update(sample_reading)

    status = store.status()
    assert status.consecutive_failures == 0
    # the last failure stays visible for diagnostics
    assert status.last_error.kind == "network"


def test_staleness(store, sample_reading, clock):
    assert store.status().is_stale(60, now=clock.now)

    store.update(sample_reading)
    assert not store.status().is_stale(60, now=clock.now + 60)
    assert store.status().is_stale(60, now=clock.now + 61)
    assert store.status().age(now=clock.now + 10) == 10


def test_concurrent_readers_only_see_whole_readings():
    store = StateStore()
    first = SensorReading(eco2=400, tvoc=10, temperature=20, humidity=40, aqi=1)
    second = SensorReading(eco2=1600, tvoc=500, temperature=25, humidity=60, aqi=5)
    seen = set()
    stop = threading.Event()

    def reader():
        while not stop.is_set():
            seen.add(store.snapshot())

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for thread in threads:
        thread.start()
    for i in range(2000):
        store.update(first if i % 2 else second)
    stop.set()
    for thread in threads:
        thread.join()

    assert seen <= {ZERO_READING, first, second}
