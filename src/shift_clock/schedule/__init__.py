"""Schedule window resolution and change-gated emission."""

from .emitter import ChangeGatedEmitter, EmitFn
from .resolver import earliest_start, latest_end, resolve_day_window, resolve_window

__all__ = [
    "ChangeGatedEmitter",
    "EmitFn",
    "earliest_start",
    "latest_end",
    "resolve_day_window",
    "resolve_window",
]
