"""MainQueue - the single execution context that owns on-screen state.

Background workers (directions requests) never touch the map surface
directly. They post callbacks here, and the UI loop runs them on its own
thread via drain(). Delayed callbacks (camera recentre) wait in a heap
until their due time.

Thread safety: post() and post_after() may be called from any thread.
drain() must only be called by the UI loop.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
import time
from collections import deque
from collections.abc import Callable

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class MainQueue:
    """FIFO of ready callbacks plus a time-ordered heap of delayed ones.

    Example:
        queue = MainQueue()
        queue.post_after(1.2, lambda: surface.set_region(region, animated=True))
        ...
        queue.drain()  # in the UI loop
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize queue.

        Args:
            clock: Monotonic time source (injectable for tests)
        """
        self._clock = clock
        self._lock = threading.Lock()
        self._ready: deque[Callback] = deque()
        self._delayed: list[tuple[float, int, Callback]] = []
        self._sequence = itertools.count()

    def post(self, callback: Callback) -> None:
        """Schedule a callback for the next drain."""
        with self._lock:
            self._ready.append(callback)

    def post_after(self, delay_s: float, callback: Callback) -> None:
        """Schedule a callback to run once delay_s has elapsed."""
        if delay_s < 0:
            raise ValueError(f"Delay must be non-negative, got {delay_s}")
        due = self._clock() + delay_s
        with self._lock:
            # Sequence number keeps equal due times in posting order
            heapq.heappush(self._delayed, (due, next(self._sequence), callback))

    def drain(self) -> int:
        """Run every ready callback and every delayed callback that is due.

        Callbacks posted while draining run in the same drain if they are
        ready. Exceptions propagate to the UI loop; callbacks queued behind
        a failing one stay queued.

        Returns:
            Number of callbacks executed.
        """
        executed = 0
        while True:
            callback = self._pop_next()
            if callback is None:
                break
            callback()
            executed += 1
        if executed:
            logger.debug(f"[QUEUE] Drained {executed} callback(s)")
        return executed

    def _pop_next(self) -> Callback | None:
        with self._lock:
            now = self._clock()
            while self._delayed and self._delayed[0][0] <= now:
                _, _, callback = heapq.heappop(self._delayed)
                self._ready.append(callback)
            if self._ready:
                return self._ready.popleft()
            return None

    def has_pending(self) -> bool:
        """True if any callback (ready or delayed) is waiting."""
        with self._lock:
            return bool(self._ready or self._delayed)

    def seconds_until_next(self) -> float | None:
        """Time until the next callback can run, 0 if one is ready, None if empty."""
        with self._lock:
            if self._ready:
                return 0.0
            if not self._delayed:
                return None
            return max(0.0, self._delayed[0][0] - self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._ready) + len(self._delayed)
