"""
Terminal Monitor for the Indoor Air Sensor
Live console view of the state store using the Rich library.
"""

import asyncio
import logging
import time
from typing import Optional

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from indoorair.poller.classifier import AirQuality, Co2Status, display_values
from indoorair.poller.state import StateStore, StoreStatus

logger = logging.getLogger(__name__)

AIR_QUALITY_STYLES = {
    AirQuality.UNKNOWN: "dim",
    AirQuality.EXCELLENT: "green",
    AirQuality.GOOD: "green",
    AirQuality.FAIR: "yellow",
    AirQuality.INFERIOR: "red",
    AirQuality.POOR: "bold red",
}


def format_time_ago(seconds: float) -> str:
    """Format an age in seconds as '45s ago', '3m ago' or '2h ago'."""
    seconds = max(0, int(seconds))
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    return f"{seconds // 3600}h ago"


class TerminalMonitor:
    """Terminal display of the latest sensor reading"""

    def __init__(
        self,
        store: StateStore,
        name: str,
        stale_after: float,
        console: Optional[Console] = None,
    ):
        """
        Args:
            store: Store to read from.
            name: Accessory name shown in the header.
            stale_after: Seconds after which the reading is shown as stale.
            console: Console to draw on, stdout by default.
        """
        self.store = store
        self.name = name
        self.stale_after = stale_after
        self.console = console or Console()

    def status_text(self, status: StoreStatus, now: Optional[float] = None) -> Text:
        """ONLINE, STALE (2m ago) or NO DATA"""
        now = now if now is not None else time.time()
        if not status.has_data:
            return Text("NO DATA", style="red")
        if status.is_stale(self.stale_after, now):
            return Text(f"STALE ({format_time_ago(status.age(now))})", style="yellow")
        return Text(f"ONLINE ({format_time_ago(status.age(now))})", style="green")

    def _create_table(self, status: StoreStatus) -> Table:
        values = display_values(status.reading)

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Characteristic", style="white", width=24)
        table.add_column("Value", style="white", width=14)

        co2_style = "red" if values.co2_detected == Co2Status.ABNORMAL else "green"
        table.add_row("CO2 Detected", Text(values.co2_detected.name, style=co2_style))
        table.add_row("CO2 Level", f"{values.co2_level} ppm")
        table.add_row(
            "Air Quality",
            Text(values.air_quality.name, style=AIR_QUALITY_STYLES[values.air_quality]),
        )
        table.add_row("VOC Density", f"{values.voc_density} ppb")
        table.add_row("Temperature", f"{values.temperature:.1f}°C")
        table.add_row("Humidity", f"{values.humidity}%")
        return table

    def render(self, now: Optional[float] = None) -> Panel:
        """Build the full display from the current store status"""
        status = self.store.status()

        header = Text()
        header.append(self.name.upper(), style="bold cyan")
        header.append(" - ")
        header.append_text(self.status_text(status, now))

        parts = [header, self._create_table(status)]
        if status.last_error is not None and status.consecutive_failures > 0:
            parts.append(
                Text(
                    f"Last error ({status.consecutive_failures}x): {status.last_error.message}",
                    style="red",
                )
            )

        return Panel(Group(*parts), style="cyan")

    async def run(self, refresh_interval: float = 1.0) -> None:
        """Redraw until cancelled"""
        with Live(self.render(), console=self.console, refresh_per_second=4) as live:
            while True:
                await asyncio.sleep(refresh_interval)
                live.update(self.render())
