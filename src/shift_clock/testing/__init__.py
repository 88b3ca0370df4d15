"""Test-only utilities for deterministic scheduling assertions."""

from .time_control import (
    ManualTimer,
    ManualTimerFactory,
    SleepRecorder,
    SteppingClock,
    fixed_now,
    sequenced_now,
)

__all__ = [
    "ManualTimer",
    "ManualTimerFactory",
    "SleepRecorder",
    "SteppingClock",
    "fixed_now",
    "sequenced_now",
]
