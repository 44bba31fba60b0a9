from __future__ import annotations

import heapq
import itertools
import logging
import time
from typing import Any, Callable, List, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[Any], None]


class EventScheduler:
    """Single-threaded timer queue.

    Callbacks fire once, in fire-time order; timers with the same fire time
    fire in the order they were scheduled. With ``realtime=False`` the clock
    jumps straight to the next fire time, otherwise ``run`` sleeps on
    ``time.monotonic`` until each timer is due.
    """

    def __init__(self, realtime: bool = False) -> None:
        self.realtime = realtime
        self._heap: List[Tuple[float, int, Callback, Any]] = []
        self._seq = itertools.count()
        self._now = 0.0
        self._origin = time.monotonic()
        self._stopped = False

    def now(self) -> float:
        if self.realtime:
            return time.monotonic() - self._origin
        return self._now

    def schedule_after(self, delay: float, callback: Callback, payload: Any = None) -> None:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        fire_time = self.now() + delay
        heapq.heappush(self._heap, (fire_time, next(self._seq), callback, payload))

    def stop(self) -> None:
        self._stopped = True

    def run(self) -> int:
        """Fire timers until none are left (or ``stop`` is called). Returns the number fired."""
        fired = 0
        self._stopped = False
        while self._heap and not self._stopped:
            fire_time, _, callback, payload = heapq.heappop(self._heap)
            if self.realtime:
                remaining = fire_time - self.now()
                if remaining > 0:
                    time.sleep(remaining)
            else:
                self._now = max(self._now, fire_time)
            callback(payload)
            fired += 1
        if self._heap:
            logger.warning("Scheduler stopped with %d pending timers", len(self._heap))
        return fired

    def __len__(self) -> int:
        return len(self._heap)
