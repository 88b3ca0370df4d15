"""Shift schedule extraction from host query results.

The host hands the widget a loosely shaped data payload::

    {"state": "Done",
     "series": [{"refId": "shiftSchedule",
                 "fields": [{"name": "start", "values": ["08:00", ...]},
                            {"name": "end", "values": ["12:00", ...]}]}]}

``extract_shift_schedule`` validates it into a tuple of periods or returns
``None``; it never yields a partial schedule.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shift_clock.errors import ScheduleError
from shift_clock.logging import get_logger
from shift_clock.models import Period

SHIFT_SCHEDULE_REF_ID = "shiftSchedule"
DONE_STATE = "Done"

logger = get_logger(__name__)


class FrameField(BaseModel):
    name: str
    values: list[Any] = Field(default_factory=list)


class DataFrame(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ref_id: str | None = Field(default=None, alias="refId")
    fields: list[FrameField] = Field(default_factory=list)


class PanelData(BaseModel):
    state: str
    series: list[DataFrame] = Field(default_factory=list)


def extract_shift_schedule(
    payload: Mapping[str, Any] | PanelData,
    *,
    ref_id: str = SHIFT_SCHEDULE_REF_ID,
) -> tuple[Period, ...] | None:
    """Return the periods held by the ``ref_id`` frame, or ``None``."""
    if isinstance(payload, PanelData):
        data = payload
    else:
        try:
            data = PanelData.model_validate(payload)
        except ValidationError as exc:
            logger.debug("query result rejected: %s", exc.errors(include_url=False))
            return None

    if data.state != DONE_STATE or not data.series:
        return None

    frame = next((serie for serie in data.series if serie.ref_id == ref_id), None)
    if frame is None or not frame.fields:
        return None

    starts = [field for field in frame.fields if field.name == "start"]
    ends = [field for field in frame.fields if field.name == "end"]
    if len(starts) != 1 or len(ends) != 1:
        return None

    start_values = starts[0].values
    end_values = ends[0].values
    if not start_values or len(start_values) != len(end_values):
        return None

    try:
        return tuple(
            Period(start=start, end=end) for start, end in zip(start_values, end_values)
        )
    except ScheduleError as exc:
        logger.debug("query result holds an invalid period: %s", exc)
        return None
