"""Diagnostics helpers."""

from .events import (
    EVENT_SCHEMA_VERSION,
    KNOWN_EVENT_TYPES,
    JsonlEventLogger,
    build_event,
    ensure_schema_compatible,
    validate_event,
)

__all__ = [
    "EVENT_SCHEMA_VERSION",
    "KNOWN_EVENT_TYPES",
    "JsonlEventLogger",
    "build_event",
    "ensure_schema_compatible",
    "validate_event",
]
