"""Static period sources and the period spec parser."""

from __future__ import annotations

from datetime import date

import pytest

from shift_clock.errors import ScheduleError
from shift_clock.models import DaySchedule, Period
from shift_clock.sources.static import StaticScheduleSource, parse_period_spec


def test_parse_period_spec_reads_comma_separated_ranges() -> None:
    assert parse_period_spec("08:00-12:00, 13:00-17:00") == (
        Period(start="08:00", end="12:00"),
        Period(start="13:00", end="17:00"),
    )


@pytest.mark.parametrize("raw", ["", " , ", "08:00", "08:00-25:00", "18:00-08:00"])
def test_parse_period_spec_rejects_invalid_specs(raw: str) -> None:
    with pytest.raises(ScheduleError):
        parse_period_spec(raw)


def test_static_source_serves_the_same_periods_every_day() -> None:
    periods = (Period(start="08:00", end="17:00"),)
    source = StaticScheduleSource(periods)
    assert source.load(date(2026, 3, 1)) == DaySchedule(day=date(2026, 3, 1), weekday=0, periods=periods)
    assert source.load(date(2026, 3, 2)) == DaySchedule(day=date(2026, 3, 2), weekday=1, periods=periods)


def test_static_source_without_periods_is_unavailable() -> None:
    assert StaticScheduleSource(()).load(date(2026, 3, 2)) is None
