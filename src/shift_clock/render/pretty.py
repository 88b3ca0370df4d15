"""Human-friendly clock rendering."""

from __future__ import annotations

from shift_clock.models import ClockFace, TimeWindow


def render_clock_pretty(face: ClockFace) -> str:
    parts = [face.date_label]
    if face.title:
        parts.append(face.title)
    parts.append(face.time_label)
    return "   ".join(parts)


def render_window_pretty(window: TimeWindow) -> str:
    width = window.end - window.start
    if width.total_seconds() == 0:
        return f"{window.start.isoformat()} (not yet open)"
    return f"{window.start.isoformat()} -> {window.end.isoformat()} ({_format_duration(width.total_seconds())})"


def _format_duration(seconds: float) -> str:
    total_minutes = int(seconds // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h{minutes:02d}"
