"""Clock widget instance: owns its schedule cache, timer and emit gate."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date, datetime, timezone
import threading
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from shift_clock.config import WidgetConfig
from shift_clock.diagnostics.events import JsonlEventLogger
from shift_clock.errors import ConfigError, SourceError
from shift_clock.logging import get_logger
from shift_clock.models import ClockFace, Period, TickOutcome, TimeWindow
from shift_clock.schedule.emitter import ChangeGatedEmitter, EmitFn
from shift_clock.schedule.resolver import resolve_day_window
from shift_clock.scheduler.timers import PollScheduler
from shift_clock.sources.base import ScheduleSource
from shift_clock.sources.query import extract_shift_schedule

NowFn = Callable[[], datetime]

TIME_LABEL_FORMAT = "%H:%M"

logger = get_logger(__name__)


class ClockWidget:
    """A live clock that keeps the host time range on the day's schedule.

    Two trigger paths share one resolve-and-emit step:

    * a timer tick (``scheduler`` fires :meth:`poll`), and
    * new schedule data (:meth:`on_query_result`, or :meth:`refresh_source`
      observing a different schedule), which also resets the timer and
      resolves immediately.

    Without a ``scheduler`` the caller drives :meth:`poll` itself. Timer
    callbacks may arrive on another thread, so the entry points run one at a
    time under an instance lock.
    """

    def __init__(
        self,
        emit: EmitFn,
        *,
        options: WidgetConfig | None = None,
        source: ScheduleSource | None = None,
        scheduler: PollScheduler | None = None,
        now_fn: NowFn | None = None,
        event_logger: JsonlEventLogger | None = None,
        instance_id: str | None = None,
    ) -> None:
        self.options = options or WidgetConfig()
        self.instance_id = instance_id or _new_instance_id()
        self._emitter = ChangeGatedEmitter(emit)
        self._source = source
        self._scheduler = scheduler
        self._now = now_fn or _zone_now_fn(self.options.timezone)
        self._event_logger = event_logger
        self._lock = threading.RLock()
        self._periods: tuple[Period, ...] | None = None
        # Day the cached periods belong to; None for host query results.
        self._schedule_day: date | None = None
        self._host_range: TimeWindow | None = None
        self._valid_setup = False
        self._disposed = False

        if self._scheduler is not None:
            self._scheduler.start(self._on_timer)

    @property
    def valid_setup(self) -> bool:
        return self._valid_setup

    @property
    def periods(self) -> tuple[Period, ...] | None:
        return self._periods

    @property
    def last_emitted(self) -> str | None:
        return self._emitter.last_emitted

    @property
    def host_time_range(self) -> TimeWindow | None:
        """Host's current time range: the last emitted window or what the host reported."""
        return self._host_range

    @property
    def disposed(self) -> bool:
        return self._disposed

    def on_time_range_changed(self, window: TimeWindow | None) -> None:
        with self._lock:
            self._host_range = window

    def on_query_result(self, payload: Mapping[str, Any], *, now: datetime | None = None) -> TickOutcome | None:
        """Apply a host query result; returns the immediate tick when it held a schedule."""
        with self._lock:
            if self._disposed:
                return None
            periods = extract_shift_schedule(payload)
            if periods is None:
                self._record_skip("query_result_unavailable")
                return None
            return self._apply_schedule(periods, day=None, now=now)

    def refresh_source(self, *, now: datetime | None = None) -> TickOutcome | None:
        """Reload the configured source.

        Returns the immediate tick when the schedule changed, a skipped outcome
        when the source failed or has nothing for today, and ``None`` when the
        cached schedule is still current.
        """
        with self._lock:
            if self._disposed or self._source is None:
                return None
            moment = now or self._now()
            try:
                schedule = self._source.load(moment.date())
            except SourceError as exc:
                logger.warning("schedule source failed, keeping previous window: %s", exc)
                self._record_skip("source_error", detail=str(exc))
                return TickOutcome(skipped_reason="source_error", resolved_at=moment)
            if schedule is None or not schedule.periods:
                self._drop_stale_schedule(moment)
                self._record_skip("source_unavailable")
                return TickOutcome(skipped_reason="source_unavailable", resolved_at=moment)
            if schedule.periods == self._periods and schedule.day == self._schedule_day:
                return None
            return self._apply_schedule(schedule.periods, day=schedule.day, now=moment)

    def poll(self, *, now: datetime | None = None) -> TickOutcome:
        """One scheduled cycle: refresh the source if any, then resolve and emit.

        A failed or empty refresh ends the cycle without resolving, so the
        previous window stays in effect.
        """
        with self._lock:
            moment = now or self._now()
            refreshed = self.refresh_source(now=moment)
            if refreshed is not None:
                return refreshed
            return self.tick(now=moment)

    def tick(self, *, now: datetime | None = None) -> TickOutcome:
        with self._lock:
            if self._disposed:
                return TickOutcome(skipped_reason="disposed")
            moment = now or self._now()
            if self._drop_stale_schedule(moment):
                return TickOutcome(skipped_reason="stale_schedule", resolved_at=moment)
            if not self._periods:
                return TickOutcome(skipped_reason="no_schedule", resolved_at=moment)

            window = resolve_day_window(self._periods, moment.date(), moment)
            emitted = self._emitter.maybe_emit(window)
            if emitted:
                self._host_range = window
                if self._event_logger is not None:
                    self._event_logger.append(
                        "window_emitted",
                        instance_id=self.instance_id,
                        payload=window.to_time_range(),
                    )
            return TickOutcome(window=window, emitted=emitted, resolved_at=moment)

    def clock_face(self, *, now: datetime | None = None) -> ClockFace | None:
        """Clock face to display, or ``None`` until a valid schedule was seen."""
        if not self._valid_setup:
            return None
        moment = now or self._now()
        return ClockFace(
            date_label=moment.strftime(self.options.date_format),
            time_label=moment.strftime(TIME_LABEL_FORMAT),
            title=self.options.dashboard_title,
        )

    def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            if self._scheduler is not None:
                self._scheduler.cancel()

    def __enter__(self) -> ClockWidget:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def _on_timer(self) -> None:
        self.poll()

    def _apply_schedule(
        self,
        periods: tuple[Period, ...],
        *,
        day: date | None,
        now: datetime | None,
    ) -> TickOutcome:
        self._periods = periods
        self._schedule_day = day
        self._valid_setup = True
        logger.info("schedule changed: %s", ", ".join(f"{p.start}-{p.end}" for p in periods))
        if self._event_logger is not None:
            self._event_logger.append(
                "schedule_changed",
                instance_id=self.instance_id,
                payload={"periods": [{"start": p.start, "end": p.end} for p in periods]},
            )
        if self._scheduler is not None:
            self._scheduler.reset(self._on_timer)
        return self.tick(now=now)

    def _drop_stale_schedule(self, moment: datetime) -> bool:
        if self._schedule_day is None or self._schedule_day == moment.date():
            return False
        logger.info("schedule for %s no longer applies on %s", self._schedule_day, moment.date())
        self._periods = None
        self._schedule_day = None
        return True

    def _record_skip(self, reason: str, *, detail: str | None = None) -> None:
        logger.debug("schedule skipped: %s", reason)
        if self._event_logger is not None:
            payload: dict[str, Any] = {"reason": reason}
            if detail is not None:
                payload["detail"] = detail
            self._event_logger.append("schedule_skipped", instance_id=self.instance_id, payload=payload)


def _zone_now_fn(zone_name: str) -> NowFn:
    try:
        zone = ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(
            f"Invalid widget.timezone '{zone_name}'. Use an IANA timezone like 'UTC' or 'Europe/Paris'."
        ) from exc
    return lambda: datetime.now(zone)  # noqa: E731


def _new_instance_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    return f"widget-{stamp}"
