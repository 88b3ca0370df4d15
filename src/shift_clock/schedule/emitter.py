"""Change-gated emission of resolved windows to the host time range."""

from __future__ import annotations

from collections.abc import Callable

from shift_clock.logging import get_logger
from shift_clock.models import TimeWindow

EmitFn = Callable[[TimeWindow], None]

logger = get_logger(__name__)


class ChangeGatedEmitter:
    """Forward a window to ``emit`` only when it differs from the last one sent."""

    def __init__(self, emit: EmitFn) -> None:
        self._emit = emit
        self._last_emitted: str | None = None

    @property
    def last_emitted(self) -> str | None:
        return self._last_emitted

    def maybe_emit(self, window: TimeWindow) -> bool:
        canonical = window.canonical()
        if canonical == self._last_emitted:
            logger.debug("window unchanged, skipping emit: %s", canonical)
            return False
        self._emit(window)
        self._last_emitted = canonical
        logger.debug("emitted window %s", canonical)
        return True

    def reset(self) -> None:
        self._last_emitted = None
