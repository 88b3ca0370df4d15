"""shift_clock package: a live clock that keeps a dashboard on the shift schedule."""

from .config import (
    RuntimeConfig,
    SourceConfig,
    WidgetConfig,
    config_to_dict,
    default_config,
    init_default_config,
    load_runtime_config,
    resolve_config_path,
)
from .models import ClockFace, DaySchedule, Period, TickOutcome, TimeWindow
from .schedule import ChangeGatedEmitter, resolve_window
from .widget import ClockWidget

__all__ = [
    "ChangeGatedEmitter",
    "ClockFace",
    "ClockWidget",
    "DaySchedule",
    "Period",
    "RuntimeConfig",
    "SourceConfig",
    "TickOutcome",
    "TimeWindow",
    "WidgetConfig",
    "config_to_dict",
    "default_config",
    "init_default_config",
    "load_runtime_config",
    "resolve_config_path",
    "resolve_window",
]

__version__ = "0.1.0"
