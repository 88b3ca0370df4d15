"""Tab-separated rendering for shell pipelines."""

from __future__ import annotations

from shift_clock.models import ClockFace, TimeWindow


def render_clock_plain(face: ClockFace) -> str:
    return "\t".join((face.date_label, face.title.replace("\t", " "), face.time_label))


def render_window_plain(window: TimeWindow) -> str:
    return f"{window.from_ms}\t{window.to_ms}"
