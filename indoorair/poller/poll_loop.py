"""Repeating fetch-and-commit loop feeding the state store."""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from indoorair.shared.models import SensorReading
from .exceptions import FetchError, NetworkError
from .fetcher import SensorFetcher
from .state import StateStore

logger = logging.getLogger(__name__)

UpdateListener = Callable[[SensorReading], None]


class LoopState(Enum):
    """Poll loop states."""
    STOPPED = "stopped"
    IDLE = "idle"  # waiting for the next tick
    FETCHING = "fetching"  # fetch in flight


class PollLoop:
    """Polls the sensor on a fixed interval and commits readings to the store.

    The next tick is scheduled only once the current one has finished, so at
    most one fetch is ever in flight. A failed fetch is recorded and the loop
    carries on at the same interval; nothing short of stop() ends it.
    """

    def __init__(
        self,
        fetcher: SensorFetcher,
        store: StateStore,
        polling_interval_ms: int,
        fetch_timeout: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the poll loop.

        Args:
            fetcher: Fetcher performing one network round-trip per tick.
            store: Store receiving successful readings and failures.
            polling_interval_ms: Delay between the end of one tick and the
                start of the next, in milliseconds.
            fetch_timeout: Upper bound for a single fetch in seconds.
                Defaults to half the polling interval.
            sleep: Coroutine used to wait between ticks.
        """
        if polling_interval_ms <= 0:
            raise ValueError(f"polling_interval_ms must be positive, got {polling_interval_ms}")

        self.fetcher = fetcher
        self.store = store
        self.polling_interval_ms = polling_interval_ms
        self.fetch_timeout = fetch_timeout if fetch_timeout is not None else self.interval / 2
        if not 0 < self.fetch_timeout < self.interval:
            raise ValueError(
                f"fetch_timeout must be positive and shorter than the {self.interval}s interval, "
                f"got {self.fetch_timeout}"
            )
        self.state = LoopState.STOPPED

        self._sleep = sleep
        self._listeners: List[UpdateListener] = []
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def interval(self) -> float:
        """Polling interval in seconds."""
        return self.polling_interval_ms / 1000.0

    @property
    def is_running(self) -> bool:
        return self._running

    def add_listener(self, listener: UpdateListener) -> Callable[[], None]:
        """Call listener with every committed reading.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def remove():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _notify(self, reading: SensorReading) -> None:
        for listener in list(self._listeners):
            try:
                listener(reading)
            except Exception as e:
                logger.error(f"Update listener {listener!r} failed: {e}")

    async def tick(self) -> bool:
        """Run one fetch cycle.

        Returns:
            True if a new reading was committed, False otherwise.
        """
        if self.state == LoopState.FETCHING:
            logger.warning("Previous fetch still in flight, skipping tick")
            return False

        previous_state = self.state
        self.state = LoopState.FETCHING
        try:
            reading = await asyncio.wait_for(self.fetcher.fetch(), timeout=self.fetch_timeout)
        except asyncio.TimeoutError:
            self._record_failure(NetworkError(f"Fetch timed out after {self.fetch_timeout:.1f}s"))
            return False
        except FetchError as e:
            self._record_failure(e)
            return False
        finally:
            self.state = previous_state

        self.store.update(reading)
        logger.info(
            f"Updated sensor data: eco2={reading.eco2} tvoc={reading.tvoc} "
            f"temperature={reading.temperature} humidity={reading.humidity} aqi={reading.aqi}"
        )
        self._notify(reading)
        return True

    def _record_failure(self, error: FetchError) -> None:
        self.store.record_error(error)
        logger.error(f"Error updating sensor data ({error.kind}): {error}")

    async def run(self) -> None:
        """Poll until stop() is called."""
        logger.info(
            f"Starting poll loop (url={self.fetcher.url}, "
            f"interval={self.polling_interval_ms}ms, timeout={self.fetch_timeout:.1f}s)"
        )
        self._running = True
        self.state = LoopState.IDLE

        try:
            while self._running:
                try:
                    await self.tick()
                except Exception as e:
                    logger.exception(f"Unexpected error in poll loop: {e}")

                if not self._running:
                    break
                logger.debug(f"Polling again in {self.polling_interval_ms} ms")
                await self._sleep(self.interval)
        finally:
            self._running = False
            self.state = LoopState.STOPPED
            logger.info("Poll loop stopped")

    def start(self) -> asyncio.Task:
        """Schedule run() on the running event loop."""
        if self._task is not None and not self._task.done():
            return self._task

        self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def stop(self) -> None:
        """Stop polling, cancelling an in-flight fetch or pending sleep."""
        self._running = False
        task, self._task = self._task, None
        if task is None or task.done():
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
