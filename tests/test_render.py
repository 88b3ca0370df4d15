"""Clock face and window formatters."""

from __future__ import annotations

from datetime import datetime, timezone
import json

import pytest

from shift_clock.errors import RenderError
from shift_clock.models import ClockFace, TimeWindow
from shift_clock.render import render_clock, render_window

WINDOW = TimeWindow(
    start=datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc),
    end=datetime(2026, 3, 2, 10, 30, tzinfo=timezone.utc),
)


def test_render_clock_pretty_omits_empty_title() -> None:
    assert render_clock(ClockFace(date_label="02/03/2026", time_label="10:30"), "pretty") == "02/03/2026   10:30"
    assert (
        render_clock(ClockFace(date_label="02/03/2026", time_label="10:30", title="Line 3"), "pretty")
        == "02/03/2026   Line 3   10:30"
    )


def test_render_clock_plain_and_json() -> None:
    face = ClockFace(date_label="02/03/2026", time_label="10:30")
    assert render_clock(face, "plain") == "02/03/2026\t\t10:30"
    assert json.loads(render_clock(face, "json")) == {"date": "02/03/2026", "time": "10:30", "title": None}


def test_render_window_formats() -> None:
    assert render_window(WINDOW, "plain") == f"{WINDOW.from_ms}\t{WINDOW.to_ms}"
    assert json.loads(render_window(WINDOW, "json"))["from"] == WINDOW.from_ms
    assert render_window(WINDOW, "pretty").endswith("(2h30)")


def test_render_window_pretty_marks_zero_width_windows() -> None:
    closed = TimeWindow(start=WINDOW.start, end=WINDOW.start)
    assert render_window(closed, "pretty").endswith("(not yet open)")


def test_render_rejects_unknown_formats() -> None:
    with pytest.raises(RenderError, match="Unsupported output format"):
        render_window(WINDOW, "jsonl")
    with pytest.raises(RenderError, match="Unsupported output format"):
        render_clock(ClockFace(date_label="", time_label=""), "yaml")
