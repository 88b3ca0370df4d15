"""Schedule sources: host query results, the opening-time endpoint, static periods."""

from .base import ScheduleSource
from .http import (
    HttpScheduleSource,
    OpeningTimeSetup,
    OpeningTimeSetupClient,
    build_setup_url,
    day_schedule_from_setup,
)
from .query import PanelData, extract_shift_schedule
from .static import StaticScheduleSource, parse_period_spec

__all__ = [
    "HttpScheduleSource",
    "OpeningTimeSetup",
    "OpeningTimeSetupClient",
    "PanelData",
    "ScheduleSource",
    "StaticScheduleSource",
    "build_setup_url",
    "day_schedule_from_setup",
    "extract_shift_schedule",
    "parse_period_spec",
]
