"""Schedule source interfaces."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from shift_clock.models import DaySchedule


class ScheduleSource(Protocol):
    def load(self, day: date) -> DaySchedule | None:
        """Return the schedule for ``day`` or ``None`` when it is not available."""
