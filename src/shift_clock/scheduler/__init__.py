"""Poll scheduling: periodic timers and the synchronous poll loop."""

from .loop import PollCycleResult, PollRunResult, run_poll_loop
from .timers import (
    DEFAULT_REFRESH_SECONDS,
    PollScheduler,
    TimerFactory,
    TimerHandle,
    threading_timer_factory,
)

__all__ = [
    "DEFAULT_REFRESH_SECONDS",
    "PollCycleResult",
    "PollRunResult",
    "PollScheduler",
    "TimerFactory",
    "TimerHandle",
    "run_poll_loop",
    "threading_timer_factory",
]
