"""JSON rendering of clock faces and windows."""

from __future__ import annotations

import json

from shift_clock.models import ClockFace, TimeWindow


def clock_face_to_dict(face: ClockFace) -> dict[str, object]:
    return {
        "date": face.date_label,
        "title": face.title or None,
        "time": face.time_label,
    }


def window_to_dict(window: TimeWindow) -> dict[str, object]:
    return {
        "from": window.from_ms,
        "to": window.to_ms,
        "from_iso": window.start.isoformat(),
        "to_iso": window.end.isoformat(),
    }


def render_clock_json(face: ClockFace) -> str:
    return json.dumps(clock_face_to_dict(face), sort_keys=True)


def render_window_json(window: TimeWindow) -> str:
    return json.dumps(window_to_dict(window), sort_keys=True)
