"""Error taxonomy for stable module boundaries."""


class ShiftClockError(Exception):
    """Base exception for shift-clock."""


class ConfigError(ShiftClockError):
    """Raised when configuration is invalid or missing."""


class ScheduleError(ShiftClockError):
    """Raised when a period or clock string is malformed."""


class SourceError(ShiftClockError):
    """Raised when a schedule source cannot deliver a usable payload."""


class SchedulerError(ShiftClockError):
    """Raised for poll loop and timer coordination failures."""


class RenderError(ShiftClockError):
    """Raised when rendering output fails."""


class DiagnosticsError(ShiftClockError):
    """Raised for debug event schema failures."""
