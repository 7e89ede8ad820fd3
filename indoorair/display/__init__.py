"""Terminal display service."""

from .terminal_monitor import TerminalMonitor


async def _run_monitor(config) -> None:
    from indoorair.poller.fetcher import SensorFetcher
    from indoorair.poller.poll_loop import PollLoop
    from indoorair.poller.state import StateStore

    store = StateStore()
    poll_loop = PollLoop(
        SensorFetcher(config.url, timeout=config.fetch_timeout),
        store,
        polling_interval_ms=config.polling_interval_ms,
        fetch_timeout=config.fetch_timeout,
    )
    # A reading older than two polling intervals means at least one missed update
    monitor = TerminalMonitor(store, config.name, stale_after=2 * poll_loop.interval)

    poll_loop.start()
    try:
        await monitor.run()
    finally:
        await poll_loop.stop()


def main():
    """Entry point for display service."""
    import asyncio

    from indoorair.bridge.config import load_config
    from indoorair.shared.logging import setup_logging

    config = load_config()
    # Log output would tear the live display
    setup_logging("WARNING")

    try:
        asyncio.run(_run_monitor(config))
    except KeyboardInterrupt:
        pass


__all__ = ["TerminalMonitor", "main"]
