"""Wire a configured widget to its schedule source and poll loop."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from shift_clock.config import RuntimeConfig
from shift_clock.diagnostics.events import JsonlEventLogger
from shift_clock.models import TimeWindow
from shift_clock.scheduler.loop import PollRunResult, SleepFn, run_poll_loop
from shift_clock.sources.base import ScheduleSource
from shift_clock.sources.http import HttpScheduleSource, OpeningTimeSetupClient
from shift_clock.sources.static import StaticScheduleSource
from shift_clock.widget import ClockWidget

NowFn = Callable[[], datetime]


def build_schedule_source(config: RuntimeConfig) -> ScheduleSource:
    if config.source.kind == "static":
        return StaticScheduleSource(config.periods)
    client = OpeningTimeSetupClient(
        config.source.url,
        timeout_seconds=config.source.timeout_seconds,
    )
    return HttpScheduleSource(client)


def build_configured_widget(
    config: RuntimeConfig,
    emit: Callable[[TimeWindow], None],
    *,
    source: ScheduleSource | None = None,
    now_fn: NowFn | None = None,
    event_logger: JsonlEventLogger | None = None,
) -> ClockWidget:
    return ClockWidget(
        emit,
        options=config.widget,
        source=source if source is not None else build_schedule_source(config),
        now_fn=now_fn,
        event_logger=event_logger,
    )


def run_configured_watch(
    config: RuntimeConfig,
    emit: Callable[[TimeWindow], None],
    *,
    interval_seconds: int | None = None,
    max_cycles: int | None = None,
    source: ScheduleSource | None = None,
    now_fn: NowFn | None = None,
    sleep_fn: SleepFn | None = None,
    event_logger: JsonlEventLogger | None = None,
) -> PollRunResult:
    """Run the widget against the configured source until the cycle budget or Ctrl-C."""
    resolved_source = source if source is not None else build_schedule_source(config)
    widget = build_configured_widget(
        config,
        emit,
        source=resolved_source,
        now_fn=now_fn,
        event_logger=event_logger,
    )
    try:
        return run_poll_loop(
            widget.poll,
            interval_seconds=interval_seconds or config.widget.refresh_seconds,
            max_cycles=max_cycles,
            now_fn=now_fn,
            sleep_fn=sleep_fn,
            event_logger=event_logger,
            instance_id=widget.instance_id,
        )
    finally:
        widget.dispose()
        if source is None and isinstance(resolved_source, HttpScheduleSource):
            resolved_source.close()
