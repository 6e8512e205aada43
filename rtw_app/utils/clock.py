"""
Cancellable timer sources for the single-threaded engine.

``AsyncioClock`` schedules on a running asyncio loop. ``ManualClock`` only
advances when told to, which makes recognizer event races reproducible in
replays and tests.
"""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, Optional


class TimerHandle(ABC):
    """Handle returned by ``Clock.call_later``."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """True once cancelled."""


class Clock(ABC):
    """Schedules callbacks after a delay in milliseconds."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms``."""

    @abstractmethod
    def now_ms(self) -> float:
        """Monotonic time in milliseconds."""


class _AsyncioTimer(TimerHandle):

    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioClock(Clock):
    """Clock backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        return _AsyncioTimer(self.loop.call_later(max(0, delay_ms) / 1000.0, callback))

    def now_ms(self) -> float:
        return self.loop.time() * 1000.0


class _ManualTimer(TimerHandle):

    def __init__(self, due_ms: float, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualClock(Clock):
    """Deterministic clock driven by ``advance()``."""

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self._queue: list[tuple[float, int, _ManualTimer]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        timer = _ManualTimer(self._now + max(0, delay_ms), callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._seq), timer))
        return timer

    def now_ms(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of scheduled, uncancelled callbacks."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def next_delay(self) -> Optional[float]:
        """Milliseconds until the next pending callback, if any."""
        for due, _, timer in sorted(self._queue):
            if not timer.cancelled:
                return due - self._now
        return None

    def advance(self, delta_ms: float) -> int:
        """
        Move time forward, running every callback that falls due.

        Callbacks scheduled while advancing run too if they are due
        within the window.

        Returns:
            Number of callbacks run
        """
        target = self._now + delta_ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = due
            timer.cancel()
            timer.callback()
            ran += 1
        self._now = target
        return ran

    def run_all(self, limit: int = 1000) -> int:
        """Run pending callbacks in due order until none remain."""
        ran = 0
        while ran < limit:
            delay = self.next_delay()
            if delay is None:
                break
            ran += self.advance(delay)
        return ran
