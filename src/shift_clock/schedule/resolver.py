"""Schedule window resolution: periods + "now" -> clamped time window."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time

from shift_clock.errors import ScheduleError
from shift_clock.models import Period, TimeWindow


def earliest_start(periods: Sequence[Period]) -> int:
    if not periods:
        raise ScheduleError("earliest_start requires at least one period.")
    return min(period.start_minutes for period in periods)


def latest_end(periods: Sequence[Period]) -> int:
    if not periods:
        raise ScheduleError("latest_end requires at least one period.")
    return max(period.end_minutes for period in periods)


def resolve_window(
    periods: Sequence[Period],
    day: date,
    now: datetime,
    fallback: TimeWindow | None = None,
) -> TimeWindow | None:
    """Resolve the visible window for ``day`` as seen at ``now``.

    An empty schedule returns ``fallback`` unchanged. Otherwise see
    :func:`resolve_day_window`.
    """
    if now.tzinfo is None:
        raise ScheduleError("now must be timezone-aware.")
    if not periods:
        return fallback
    return resolve_day_window(periods, day, now)


def resolve_day_window(periods: Sequence[Period], day: date, now: datetime) -> TimeWindow:
    """Window from the earliest start to the latest end of ``day``.

    When ``day`` is today the end is clamped so it never runs ahead of ``now``
    (and collapses onto the start before opening).
    """
    if now.tzinfo is None:
        raise ScheduleError("now must be timezone-aware.")
    if not periods:
        raise ScheduleError("resolve_day_window requires at least one period.")

    if len(periods) == 1:
        start_minutes = periods[0].start_minutes
        end_minutes = periods[0].end_minutes
    else:
        start_minutes = earliest_start(periods)
        end_minutes = latest_end(periods)

    window_from = _at_minutes(day, start_minutes, now)
    window_to = _at_minutes(day, end_minutes, now)

    if day == now.date():
        if now < window_from:
            window_to = window_from
        elif now < window_to:
            window_to = now

    return TimeWindow(start=window_from, end=window_to)


def _at_minutes(day: date, minutes: int, now: datetime) -> datetime:
    return datetime.combine(day, time(hour=minutes // 60, minute=minutes % 60), tzinfo=now.tzinfo)
