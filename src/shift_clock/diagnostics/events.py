"""Structured JSONL debug events for widget instances."""

from __future__ import annotations

from datetime import datetime, timezone
import json
from pathlib import Path
import re
from typing import Any

from shift_clock.errors import DiagnosticsError

EVENT_SCHEMA_VERSION = "v1"
KNOWN_EVENT_TYPES = frozenset(
    {
        "schedule_changed",
        "schedule_skipped",
        "window_emitted",
        "poll_cycle",
    }
)

_REQUIRED_FIELDS = ("schema_version", "event_type", "occurred_at", "instance_id", "payload")


class JsonlEventLogger:
    """Append schema-validated JSONL debug events."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def append(
        self,
        event_type: str,
        *,
        instance_id: str,
        payload: dict[str, Any] | None = None,
        occurred_at: datetime | None = None,
    ) -> dict[str, Any]:
        event = build_event(
            event_type,
            instance_id=instance_id,
            payload=payload,
            occurred_at=occurred_at,
        )
        with self._path.open("a", encoding="utf-8") as stream:
            stream.write(json.dumps(event, sort_keys=True))
            stream.write("\n")
        return event

    def read_events(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            return []
        events: list[dict[str, Any]] = []
        for line_number, line in enumerate(self._path.read_text(encoding="utf-8").splitlines(), start=1):
            if not line.strip():
                continue
            try:
                event = json.loads(line)
            except json.JSONDecodeError as exc:
                raise DiagnosticsError(f"{self._path}:{line_number} is not valid JSON: {exc}") from exc
            validate_event(event)
            events.append(event)
        return events


def build_event(
    event_type: str,
    *,
    instance_id: str,
    payload: dict[str, Any] | None = None,
    occurred_at: datetime | None = None,
) -> dict[str, Any]:
    resolved_time = occurred_at or datetime.now(timezone.utc)
    if resolved_time.tzinfo is None:
        resolved_time = resolved_time.replace(tzinfo=timezone.utc)
    event = {
        "schema_version": EVENT_SCHEMA_VERSION,
        "event_type": event_type.strip(),
        "occurred_at": resolved_time.isoformat(),
        "instance_id": instance_id.strip(),
        "payload": payload if payload is not None else {},
    }
    validate_event(event)
    return event


def validate_event(event: dict[str, Any]) -> None:
    for field in _REQUIRED_FIELDS:
        if field not in event:
            raise DiagnosticsError(f"Debug event missing required field '{field}'.")

    ensure_schema_compatible(event["schema_version"])
    event_type = event["event_type"]
    if not isinstance(event_type, str) or event_type not in KNOWN_EVENT_TYPES:
        known = ", ".join(sorted(KNOWN_EVENT_TYPES))
        raise DiagnosticsError(f"Unknown event_type {event_type!r}; expected one of [{known}].")
    if not isinstance(event["occurred_at"], str) or not event["occurred_at"].strip():
        raise DiagnosticsError("occurred_at must be a non-empty ISO timestamp string.")
    if not isinstance(event["instance_id"], str) or not event["instance_id"].strip():
        raise DiagnosticsError("instance_id must be a non-empty string.")
    if not isinstance(event["payload"], dict):
        raise DiagnosticsError("payload must be an object.")


def ensure_schema_compatible(schema_version: object) -> None:
    """Accept events only when the schema major matches the current major."""
    if not isinstance(schema_version, str):
        raise DiagnosticsError("schema_version must be a string.")
    match = re.match(r"^v?(?P<major>\d+)(?:[._-]\d+)?$", schema_version.strip().lower())
    if match is None:
        raise DiagnosticsError(f"Invalid schema version '{schema_version}'. Use forms like 'v1' or '1.0'.")
    current_major = EVENT_SCHEMA_VERSION.lstrip("v")
    if match.group("major") != current_major:
        raise DiagnosticsError(
            f"Incompatible debug event schema '{schema_version}'. Expected major '{current_major}'."
        )
