"""Output formatters for clock faces and resolved windows."""

from __future__ import annotations

from shift_clock.errors import RenderError
from shift_clock.models import ClockFace, TimeWindow
from shift_clock.render.jsonout import (
    clock_face_to_dict,
    render_clock_json,
    render_window_json,
    window_to_dict,
)
from shift_clock.render.plain import render_clock_plain, render_window_plain
from shift_clock.render.pretty import render_clock_pretty, render_window_pretty


def render_clock(face: ClockFace, output_format: str) -> str:
    if output_format == "pretty":
        return render_clock_pretty(face)
    if output_format == "plain":
        return render_clock_plain(face)
    if output_format == "json":
        return render_clock_json(face)
    raise RenderError(f"Unsupported output format '{output_format}'. Use one of: pretty, plain, json.")


def render_window(window: TimeWindow, output_format: str) -> str:
    if output_format == "pretty":
        return render_window_pretty(window)
    if output_format == "plain":
        return render_window_plain(window)
    if output_format == "json":
        return render_window_json(window)
    raise RenderError(f"Unsupported output format '{output_format}'. Use one of: pretty, plain, json.")


__all__ = [
    "clock_face_to_dict",
    "render_clock",
    "render_window",
    "window_to_dict",
]
