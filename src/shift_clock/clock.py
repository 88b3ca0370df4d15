"""24-hour clock string parsing shared by models and sources."""

from __future__ import annotations

import re

from shift_clock.errors import ScheduleError

_CLOCK_RE = re.compile(r"^\s*(?P<hour>\d{1,2}):(?P<minute>\d{2})\s*$")


def parse_clock(raw: str) -> int:
    """Parse an ``HH:MM`` string into minutes since midnight."""
    if not isinstance(raw, str):
        raise ScheduleError(f"Invalid clock value {raw!r}: expected an 'HH:MM' string.")
    match = _CLOCK_RE.fullmatch(raw)
    if match is None:
        raise ScheduleError(f"Invalid clock value '{raw}'. Expected format HH:MM (24-hour clock).")
    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    if hour > 23:
        raise ScheduleError(f"Invalid clock value '{raw}'. Hour must be between 00 and 23.")
    if minute > 59:
        raise ScheduleError(f"Invalid clock value '{raw}'. Minute must be between 00 and 59.")
    return hour * 60 + minute
