"""Fixed schedule supplied by config or the command line."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from shift_clock.errors import ScheduleError
from shift_clock.models import DaySchedule, Period, js_weekday


class StaticScheduleSource:
    """Serve the same periods for every day."""

    def __init__(self, periods: Iterable[Period]) -> None:
        self._periods = tuple(periods)

    @property
    def periods(self) -> tuple[Period, ...]:
        return self._periods

    def load(self, day: date) -> DaySchedule | None:
        if not self._periods:
            return None
        return DaySchedule(day=day, weekday=js_weekday(day), periods=self._periods)


def parse_period_spec(raw: str) -> tuple[Period, ...]:
    """Parse ``"08:00-12:00,13:00-17:00"`` into periods."""
    periods: list[Period] = []
    for chunk in raw.split(","):
        item = chunk.strip()
        if not item:
            continue
        start, sep, end = item.partition("-")
        if not sep:
            raise ScheduleError(
                f"Invalid period '{item}'. Expected START-END such as 08:00-12:00."
            )
        periods.append(Period(start=start.strip(), end=end.strip()))
    if not periods:
        raise ScheduleError(f"No periods found in '{raw}'. Expected START-END[,START-END...].")
    return tuple(periods)
