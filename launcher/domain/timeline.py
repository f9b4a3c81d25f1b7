"""Shared UTC timestamp helpers for lifecycle bookkeeping."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Callable


def domain_utc_now() -> datetime:
    """Return the current timezone-aware UTC timestamp.

    Returns:
        datetime: Current UTC time.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return datetime.now(timezone.utc)


class StrictlyIncreasingUtcClock:
    """UTC clock whose successive readings are strictly increasing.

    Wall-clock resolution can return equal values for two calls made in quick
    succession. Lifecycle timestamps (`launched_at_utc`, `last_accessed_utc`)
    must order successive operations, so equal or earlier readings are bumped
    one microsecond past the previous value.
    """

    _TICK = timedelta(microseconds=1)

    def __init__(self, time_source: Callable[[], datetime] | None = None):
        """Initialize clock state.

        Args:
            time_source: Optional provider of timezone-aware UTC readings.

        Returns:
            None: Initializer does not return a value.

        Raises:
            RuntimeError: This initializer does not raise runtime errors.
        """

        self._time_source = time_source or domain_utc_now
        self._last_reading: datetime | None = None
        self._lock = threading.Lock()

    def __call__(self) -> datetime:
        """Return the next strictly increasing UTC reading.

        Returns:
            datetime: Timestamp greater than every previous reading.

        Raises:
            ValueError: Raised when the time source returns a naive datetime.
        """

        reading = self._time_source()
        if reading.tzinfo is None:
            raise ValueError("time_source must return timezone-aware datetimes")
        with self._lock:
            if self._last_reading is not None and reading <= self._last_reading:
                reading = self._last_reading + self._TICK
            self._last_reading = reading
            return reading
