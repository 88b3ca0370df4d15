"""Timer handles and the periodic poll scheduler."""

from __future__ import annotations

from collections.abc import Callable
import threading
from typing import Protocol

from shift_clock.errors import SchedulerError

DEFAULT_REFRESH_SECONDS = 60


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Cancel the pending callback; a no-op once it has fired."""


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def threading_timer_factory(delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
    """Arm a one-shot daemon ``threading.Timer``."""
    timer = threading.Timer(delay_seconds, callback)
    timer.daemon = True
    timer.start()
    return timer


class PollScheduler:
    """Fire a callback every ``interval_seconds`` with at most one pending handle.

    ``reset`` and ``cancel`` may be called from the host thread while a timer
    thread re-arms, so handle bookkeeping is serialized by a lock. The callback
    itself runs outside the lock.
    """

    def __init__(
        self,
        interval_seconds: int = DEFAULT_REFRESH_SECONDS,
        timer_factory: TimerFactory = threading_timer_factory,
    ) -> None:
        if isinstance(interval_seconds, bool) or interval_seconds <= 0:
            raise SchedulerError("interval_seconds must be > 0.")
        self._interval_seconds = interval_seconds
        self._timer_factory = timer_factory
        self._lock = threading.RLock()
        self._callback: Callable[[], None] | None = None
        self._handle: TimerHandle | None = None

    @property
    def interval_seconds(self) -> int:
        return self._interval_seconds

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self, callback: Callable[[], None]) -> None:
        self.reset(callback)

    def reset(self, callback: Callable[[], None] | None = None) -> None:
        """Cancel any pending tick and schedule a fresh one a full interval out."""
        with self._lock:
            if callback is not None:
                self._callback = callback
            if self._callback is None:
                raise SchedulerError("PollScheduler.reset needs a callback before the first start.")
            self._cancel_handle()
            self._arm()

    def cancel(self) -> None:
        with self._lock:
            self._callback = None
            self._cancel_handle()

    def _arm(self) -> None:
        self._handle = self._timer_factory(float(self._interval_seconds), self._fire)

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        with self._lock:
            self._handle = None
            callback = self._callback
        if callback is None:
            return
        try:
            callback()
        finally:
            with self._lock:
                # The callback may have reset or cancelled the schedule itself.
                if self._callback is not None and self._handle is None:
                    self._arm()
