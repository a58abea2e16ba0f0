from __future__ import annotations
import heapq
import itertools
import logging
from typing import Callable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class TimerHandle:
    """A pending one-shot or repeating callback owned by a Scheduler."""

    def __init__(self, due_ms: float, callback: Callable[[], None], period_ms: Optional[float] = None):
        self.due_ms = due_ms
        self.callback = callback
        self.period_ms = period_ms
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        if self._cancelled:
            return False
        return self.period_ms is not None or not self._fired

    def cancel(self) -> None:
        self._cancelled = True


class Scheduler:
    """
    Deferred callbacks on a virtual millisecond clock.

    Nothing runs on its own: the frame loop (or a test) calls advance(dt_ms)
    and every callback due inside that window fires in due-time order, with
    now_ms set to the callback's due time while it runs.
    """

    def __init__(self):
        self.now_ms: float = 0.0
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    def _push(self, handle: TimerHandle) -> None:
        heapq.heappush(self._queue, (handle.due_ms, next(self._seq), handle))

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.now_ms + max(0.0, delay_ms), callback)
        self._push(handle)
        return handle

    def call_every(self, period_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        handle = TimerHandle(self.now_ms + period_ms, callback, period_ms)
        self._push(handle)
        return handle

    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if h.active)

    def advance(self, dt_ms: float) -> None:
        target = self.now_ms + max(0.0, dt_ms)
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now_ms = due
            handle._fired = True
            handle.callback()
            # the callback may have cancelled its own repeating handle
            if handle.period_ms is not None and not handle.cancelled:
                handle.due_ms = due + handle.period_ms
                self._push(handle)
        self.now_ms = target


class TimerScope:
    """
    Owns the timers created for one phase of a game. close() cancels exactly
    those timers, and a closed scope accepts no new ones.
    """

    def __init__(self, scheduler: Scheduler, name: str = "scope"):
        self.scheduler = scheduler
        self.name = name
        self._handles: Set[TimerHandle] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _track(self, handle: TimerHandle) -> TimerHandle:
        self._handles.add(handle)
        return handle

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if self._closed:
            raise RuntimeError(f"timer scope '{self.name}' is closed")
        # prune fired one-shots so long rounds don't accumulate handles
        self._handles = {h for h in self._handles if h.active}
        return self._track(self.scheduler.call_later(delay_ms, callback))

    def call_every(self, period_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if self._closed:
            raise RuntimeError(f"timer scope '{self.name}' is closed")
        return self._track(self.scheduler.call_every(period_ms, callback))

    def active_count(self) -> int:
        return sum(1 for h in self._handles if h.active)

    def close(self) -> None:
        if self._closed:
            return
        for handle in self._handles:
            handle.cancel()
        logger.debug("closed timer scope %s (%d handles)", self.name, len(self._handles))
        self._handles.clear()
        self._closed = True

    def __enter__(self) -> "TimerScope":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
