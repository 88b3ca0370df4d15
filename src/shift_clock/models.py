"""Data model contracts for cross-module use."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
import json

from shift_clock.clock import parse_clock
from shift_clock.errors import ScheduleError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Period:
    """One ``start``/``end`` pair of a working day, both ``HH:MM``."""

    start: str
    end: str

    def __post_init__(self) -> None:
        start_minutes = parse_clock(self.start)
        end_minutes = parse_clock(self.end)
        if end_minutes < start_minutes:
            raise ScheduleError(
                f"Invalid period {self.start}-{self.end}: end is before start "
                "(periods crossing midnight are not supported)."
            )

    @property
    def start_minutes(self) -> int:
        return parse_clock(self.start)

    @property
    def end_minutes(self) -> int:
        return parse_clock(self.end)


@dataclass(frozen=True)
class DaySchedule:
    day: date
    weekday: int
    periods: tuple[Period, ...] = ()

    def __post_init__(self) -> None:
        if self.weekday < 0 or self.weekday > 6:
            raise ScheduleError(f"Invalid weekday {self.weekday}: expected 0 (Sunday) through 6.")


@dataclass(frozen=True)
class TimeWindow:
    """Concrete ``[from, to]`` interval pushed to the host time range."""

    start: datetime
    end: datetime

    @property
    def from_ms(self) -> int:
        return _epoch_ms(self.start)

    @property
    def to_ms(self) -> int:
        return _epoch_ms(self.end)

    def to_time_range(self) -> dict[str, int]:
        return {"from": self.from_ms, "to": self.to_ms}

    def canonical(self) -> str:
        return json.dumps(self.to_time_range(), separators=(",", ":"))


@dataclass(frozen=True)
class ClockFace:
    date_label: str
    time_label: str
    title: str = ""


@dataclass(frozen=True)
class TickOutcome:
    window: TimeWindow | None = None
    emitted: bool = False
    skipped_reason: str | None = None
    resolved_at: datetime | None = field(default=None, compare=False)


def js_weekday(day: date) -> int:
    """Weekday index with Sunday as 0, as used by opening-time setups."""
    return day.isoweekday() % 7


def _epoch_ms(value: datetime) -> int:
    if value.tzinfo is None:
        raise ScheduleError("TimeWindow datetimes must be timezone-aware.")
    return (value - _EPOCH) // timedelta(milliseconds=1)
