"""Tests for the terminal monitor."""

from rich.console import Console

from indoorair.display.terminal_monitor import TerminalMonitor, format_time_ago
from indoorair.poller.exceptions import NetworkError


def _monitor(store) -> TerminalMonitor:
    return TerminalMonitor(store, "Office", stale_after=60, console=Console(record=True, width=80))


def _render_text(monitor, now) -> str:
    monitor.console.print(monitor.render(now))
    return monitor.console.export_text()


def test_format_time_ago():
    assert format_time_ago(45.7) == "45s ago"
    assert format_time_ago(185) == "3m ago"
    assert format_time_ago(7300) == "2h ago"
    assert format_time_ago(-3) == "0s ago"


def test_status_text(store, sample_reading, clock):
    monitor = _monitor(store)
    assert monitor.status_text(store.status(), clock.now).plain == "NO DATA"

    store.update(sample_reading)

    assert monitor.status_text(store.status(), clock.now + 10).plain == "ONLINE (10s ago)"
    assert monitor.status_text(store.status(), clock.now + 120).plain == "STALE (2m ago)"


def test_render_shows_display_values(store, sample_reading, clock):
    monitor = _monitor(store)
    store.update(sample_reading)

    text = _render_text(monitor, clock.now)

    assert "OFFICE" in text
    assert "ABNORMAL" in text
    assert "1500 ppm" in text
    assert "INFERIOR" in text
    assert "300 ppb" in text
    assert "21.5°C" in text
    assert "45%" in text
    assert "Last error" not in text


def test_render_shows_last_error(store, sample_reading, clock):
    monitor = _monitor(store)
    store.update(sample_reading)
    store.record_error(NetworkError("connection refused"))

    text = _render_text(monitor, clock.now)

    assert "Last error (1x): connection refused" in text
    assert "1500 ppm" in text
