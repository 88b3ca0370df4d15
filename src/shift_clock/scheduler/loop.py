"""Synchronous poll loop used when no host timer drives the widget."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import time as time_module

from shift_clock.diagnostics.events import JsonlEventLogger
from shift_clock.errors import SchedulerError
from shift_clock.models import TickOutcome

TickFn = Callable[[], TickOutcome]
NowFn = Callable[[], datetime]
SleepFn = Callable[[float], None]

MAX_RECORDED_CYCLES = 100


@dataclass(frozen=True)
class PollCycleResult:
    cycle: int
    started_at: datetime
    next_run_at: datetime | None
    sleep_seconds: float
    emitted: bool
    skipped_reason: str | None = None
    window_from_ms: int | None = None
    window_to_ms: int | None = None


@dataclass(frozen=True)
class PollRunResult:
    cycles: tuple[PollCycleResult, ...]
    cycles_completed: int = 0
    emitted_count: int = 0
    skipped_count: int = 0
    interrupted: bool = False


def run_poll_loop(
    tick: TickFn,
    *,
    interval_seconds: int,
    max_cycles: int | None = None,
    now_fn: NowFn | None = None,
    sleep_fn: SleepFn | None = None,
    event_logger: JsonlEventLogger | None = None,
    instance_id: str = "poll",
) -> PollRunResult:
    """Run ``tick`` every ``interval_seconds`` until the cycle budget or an interrupt."""
    if isinstance(interval_seconds, bool) or interval_seconds <= 0:
        raise SchedulerError("interval_seconds must be > 0.")
    if max_cycles is not None and max_cycles <= 0:
        raise SchedulerError("max_cycles must be > 0 when provided.")

    now = now_fn or (lambda: datetime.now(timezone.utc))
    sleeper = sleep_fn or time_module.sleep
    recorded: deque[PollCycleResult] = deque(maxlen=MAX_RECORDED_CYCLES)
    completed = 0
    emitted_count = 0
    skipped_count = 0

    def _result(interrupted: bool = False) -> PollRunResult:
        return PollRunResult(
            cycles=tuple(recorded),
            cycles_completed=completed,
            emitted_count=emitted_count,
            skipped_count=skipped_count,
            interrupted=interrupted,
        )

    cycle = 0
    while max_cycles is None or cycle < max_cycles:
        cycle += 1
        started_at = _normalize_datetime(now())
        try:
            outcome = tick()
        except KeyboardInterrupt:
            return _result(interrupted=True)

        completed += 1
        if outcome.emitted:
            emitted_count += 1
        if outcome.skipped_reason is not None:
            skipped_count += 1

        is_last_cycle = max_cycles is not None and cycle == max_cycles
        next_run_at: datetime | None = None
        sleep_seconds = 0.0
        if not is_last_cycle:
            next_run_at = started_at + timedelta(seconds=interval_seconds)
            sleep_seconds = max(0.0, (next_run_at - _normalize_datetime(now())).total_seconds())

        cycle_result = PollCycleResult(
            cycle=cycle,
            started_at=started_at,
            next_run_at=next_run_at,
            sleep_seconds=sleep_seconds,
            emitted=outcome.emitted,
            skipped_reason=outcome.skipped_reason,
            window_from_ms=outcome.window.from_ms if outcome.window is not None else None,
            window_to_ms=outcome.window.to_ms if outcome.window is not None else None,
        )
        recorded.append(cycle_result)

        if event_logger is not None:
            event_logger.append(
                "poll_cycle",
                instance_id=instance_id,
                payload={
                    "cycle": cycle_result.cycle,
                    "emitted": cycle_result.emitted,
                    "skipped_reason": cycle_result.skipped_reason,
                    "from": cycle_result.window_from_ms,
                    "to": cycle_result.window_to_ms,
                    "sleep_seconds": cycle_result.sleep_seconds,
                },
            )

        if is_last_cycle:
            break
        try:
            sleeper(sleep_seconds)
        except KeyboardInterrupt:
            return _result(interrupted=True)

    return _result()


def _normalize_datetime(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
