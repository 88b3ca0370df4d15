"""Model contracts and validation."""

from __future__ import annotations

from datetime import date, datetime, timezone
import json
from zoneinfo import ZoneInfo

import pytest

from shift_clock.errors import ScheduleError
from shift_clock.models import DaySchedule, Period, TimeWindow, js_weekday


def test_period_exposes_minutes() -> None:
    period = Period(start="08:30", end="12:00")
    assert period.start_minutes == 510
    assert period.end_minutes == 720


def test_period_rejects_cross_midnight() -> None:
    with pytest.raises(ScheduleError, match="crossing midnight"):
        Period(start="22:00", end="06:00")


def test_period_rejects_malformed_clock() -> None:
    with pytest.raises(ScheduleError, match="Invalid clock value"):
        Period(start="8h", end="12:00")


def test_day_schedule_rejects_out_of_range_weekday() -> None:
    with pytest.raises(ScheduleError, match="weekday"):
        DaySchedule(day=date(2026, 3, 2), weekday=7)


def test_js_weekday_uses_sunday_as_zero() -> None:
    assert js_weekday(date(2026, 3, 1)) == 0  # Sunday
    assert js_weekday(date(2026, 3, 2)) == 1  # Monday
    assert js_weekday(date(2026, 3, 7)) == 6  # Saturday


def test_time_window_serializes_epoch_milliseconds() -> None:
    window = TimeWindow(
        start=datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc),
        end=datetime(1970, 1, 1, 0, 0, 2, 500_000, tzinfo=timezone.utc),
    )
    assert window.to_time_range() == {"from": 1000, "to": 2500}
    assert window.canonical() == '{"from":1000,"to":2500}'
    assert json.loads(window.canonical()) == window.to_time_range()


def test_time_window_canonical_is_timezone_independent() -> None:
    utc = TimeWindow(
        start=datetime(2026, 3, 2, 7, 0, tzinfo=timezone.utc),
        end=datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc),
    )
    paris = ZoneInfo("Europe/Paris")
    local = TimeWindow(
        start=datetime(2026, 3, 2, 8, 0, tzinfo=paris),
        end=datetime(2026, 3, 2, 10, 0, tzinfo=paris),
    )
    assert utc.canonical() == local.canonical()


def test_time_window_requires_aware_datetimes() -> None:
    window = TimeWindow(start=datetime(2026, 3, 2, 8, 0), end=datetime(2026, 3, 2, 9, 0))
    with pytest.raises(ScheduleError, match="timezone-aware"):
        window.to_time_range()
