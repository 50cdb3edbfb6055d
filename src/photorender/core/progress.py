"""Latest-value progress counter shared by the engine worker and the display loop."""

from __future__ import annotations

import threading


class ProgressAggregator:
    """Holds the most recent render progress as an integer percentage.

    ``record`` is called from the engine's worker thread, ``value`` from the
    display loop. Both take the same lock for the duration of a single
    assignment or read. Only the latest value is kept and monotonicity is
    not enforced.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._percent = 0

    def record(self, fraction: float) -> None:
        percent = min(100, max(0, int(fraction * 100)))
        with self._lock:
            self._percent = percent

    @property
    def value(self) -> int:
        with self._lock:
            return self._percent
