"""Window resolution over a day's periods."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from shift_clock.errors import ScheduleError
from shift_clock.models import Period, TimeWindow
from shift_clock.schedule.resolver import earliest_start, latest_end, resolve_day_window, resolve_window

UTC = timezone.utc
DAY = date(2026, 3, 2)


def _at(hour: int, minute: int = 0, *, day: date = DAY, tz: object = UTC) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz)  # type: ignore[arg-type]


def test_resolve_window_clamps_to_now_while_day_is_running() -> None:
    periods = [Period("08:00", "12:00"), Period("13:00", "17:00")]
    window = resolve_window(periods, DAY, _at(10, 30))
    assert window == TimeWindow(start=_at(8), end=_at(10, 30))


def test_resolve_window_keeps_end_once_day_has_elapsed() -> None:
    window = resolve_window([Period("08:00", "17:00")], DAY, _at(20))
    assert window == TimeWindow(start=_at(8), end=_at(17))


def test_resolve_window_returns_fallback_for_empty_schedule() -> None:
    fallback = TimeWindow(start=_at(0), end=_at(6))
    assert resolve_window([], DAY, _at(10), fallback=fallback) is fallback
    assert resolve_window([], DAY, _at(10)) is None


def test_resolve_window_is_zero_width_before_opening() -> None:
    window = resolve_window([Period("08:00", "12:00")], DAY, _at(6))
    assert window == TimeWindow(start=_at(8), end=_at(8))


def test_resolve_window_uses_min_start_and_max_end_of_unordered_periods() -> None:
    periods = [Period("13:00", "17:00"), Period("08:00", "12:00"), Period("09:00", "18:30")]
    assert earliest_start(periods) == 8 * 60
    assert latest_end(periods) == 18 * 60 + 30
    window = resolve_window(periods, DAY - timedelta(days=1), _at(10))
    assert window == TimeWindow(start=_at(8, day=DAY - timedelta(days=1)), end=_at(18, 30, day=DAY - timedelta(days=1)))


def test_resolve_window_does_not_clamp_when_now_equals_from() -> None:
    window = resolve_window([Period("08:00", "12:00")], DAY, _at(8))
    assert window is not None
    assert window.start == _at(8)
    assert window.end == _at(8)


def test_resolve_window_keeps_end_when_now_equals_to() -> None:
    window = resolve_window([Period("08:00", "12:00")], DAY, _at(12))
    assert window == TimeWindow(start=_at(8), end=_at(12))


def test_resolve_window_does_not_clamp_other_days() -> None:
    tomorrow = DAY + timedelta(days=1)
    window = resolve_window([Period("08:00", "12:00")], tomorrow, _at(6))
    assert window == TimeWindow(start=_at(8, day=tomorrow), end=_at(12, day=tomorrow))


def test_resolve_window_zeroes_seconds_and_microseconds() -> None:
    now = datetime(2026, 3, 2, 10, 30, 42, 123_000, tzinfo=UTC)
    window = resolve_window([Period("08:00", "17:00")], DAY, now)
    assert window is not None
    assert window.start == _at(8)
    assert window.end == now


def test_resolve_window_uses_the_timezone_of_now() -> None:
    paris = ZoneInfo("Europe/Paris")
    now = _at(10, 30, tz=paris)
    window = resolve_window([Period("08:00", "17:00")], DAY, now)
    assert window is not None
    assert window.start.tzinfo is paris
    assert window.start.astimezone(UTC).hour == 7


def test_resolve_window_never_inverts() -> None:
    periods = [Period("06:15", "09:45"), Period("11:00", "14:00"), Period("15:30", "22:00")]
    for minutes in range(0, 24 * 60, 7):
        now = _at(0) + timedelta(minutes=minutes)
        window = resolve_window(periods, DAY, now)
        assert window is not None
        assert window.start <= window.end
        assert window.start == _at(6, 15)
        assert window.end <= _at(22)


def test_resolve_window_requires_aware_now() -> None:
    with pytest.raises(ScheduleError, match="timezone-aware"):
        resolve_window([Period("08:00", "12:00")], DAY, datetime(2026, 3, 2, 10, 0))


def test_earliest_start_requires_periods() -> None:
    with pytest.raises(ScheduleError):
        earliest_start([])
    with pytest.raises(ScheduleError):
        latest_end([])


def test_resolve_day_window_requires_periods() -> None:
    assert resolve_day_window([Period("08:00", "12:00")], DAY, _at(9)) == TimeWindow(start=_at(8), end=_at(9))
    with pytest.raises(ScheduleError, match="at least one period"):
        resolve_day_window([], DAY, _at(9))
