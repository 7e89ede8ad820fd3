"""Latest-known-good sensor state shared between the poll loop and query handlers."""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from indoorair.shared.models import SensorReading, ZERO_READING
from .exceptions import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchFailure:
    """Record of the most recent failed fetch."""
    kind: str  # "network" or "parse"
    message: str
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def from_error(cls, error: FetchError, timestamp: Optional[float] = None) -> "FetchFailure":
        return cls(
            kind=error.kind,
            message=str(error),
            timestamp=timestamp if timestamp is not None else time.time(),
        )


@dataclass(frozen=True)
class StoreStatus:
    """Everything the store knows, captured at one instant."""
    reading: SensorReading = ZERO_READING
    last_updated: Optional[float] = None
    last_error: Optional[FetchFailure] = None
    consecutive_failures: int = 0

    @property
    def has_data(self) -> bool:
        return self.last_updated is not None

    def age(self, now: Optional[float] = None) -> Optional[float]:
        """Seconds since the reading was committed, None if never."""
        if self.last_updated is None:
            return None
        return (now if now is not None else time.time()) - self.last_updated

    def is_stale(self, max_age: float, now: Optional[float] = None) -> bool:
        """A store that never received a reading is always stale."""
        age = self.age(now)
        return age is None or age > max_age


class StateStore:
    """Holds the single most recent reading.

    The poll loop is the only writer. Readers may call from any thread: each
    write swaps in a new immutable StoreStatus under a lock, so a reader sees
    either the old snapshot or the new one, never a mix.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._status = StoreStatus()

    def update(self, reading: SensorReading) -> None:
        """Replace the stored reading and reset the failure count."""
        if not isinstance(reading, SensorReading):
            raise TypeError(f"Expected SensorReading, got {type(reading)}")

        with self._lock:
            self._status = StoreStatus(
                reading=reading,
                last_updated=self._clock(),
                last_error=self._status.last_error,
                consecutive_failures=0,
            )

    def record_error(self, error: FetchError) -> None:
        """Remember a failed fetch; the previous reading is kept."""
        with self._lock:
            current = self._status
            self._status = StoreStatus(
                reading=current.reading,
                last_updated=current.last_updated,
                last_error=FetchFailure.from_error(error, self._clock()),
                consecutive_failures=current.consecutive_failures + 1,
            )
            failures = self._status.consecutive_failures

        if failures > 1:
            logger.debug(f"{failures} consecutive fetch failures, serving reading from {current.last_updated}")

    def snapshot(self) -> SensorReading:
        with self._lock:
            return self._status.reading

    def status(self) -> StoreStatus:
        with self._lock:
            return self._status

    @property
    def last_updated(self) -> Optional[float]:
        return self.status().last_updated

    @property
    def last_error(self) -> Optional[FetchFailure]:
        return self.status().last_error
