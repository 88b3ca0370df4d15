"""Opening-time setup fetched from the local application setup endpoint."""

from __future__ import annotations

from datetime import date
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shift_clock.errors import ScheduleError, SourceError
from shift_clock.logging import get_logger
from shift_clock.models import DaySchedule, Period, js_weekday

DEFAULT_PROTOCOL = "http"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3000
DEFAULT_SETUP_PATH = "/app-setup/opening-time-setup"
DEFAULT_TIMEOUT_SECONDS = 10.0

logger = get_logger(__name__)


class PeriodPayload(BaseModel):
    start: str
    end: str


class DayValues(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: str = ""
    week_day: int = Field(alias="weekDay", ge=0, le=6)
    periods: list[PeriodPayload] = Field(default_factory=list)


class SetupValue(BaseModel):
    model: list[str] = Field(default_factory=list)
    week: list[DayValues] = Field(default_factory=list)


class OpeningTimeSetup(BaseModel):
    key: str
    value: SetupValue

    def day_values(self, weekday: int) -> DayValues | None:
        return next((entry for entry in self.value.week if entry.week_day == weekday), None)


def build_setup_url(
    protocol: str = DEFAULT_PROTOCOL,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    path: str = DEFAULT_SETUP_PATH,
) -> str:
    scheme = protocol.rstrip(":/") or DEFAULT_PROTOCOL
    normalized_path = path if path.startswith("/") else f"/{path}"
    return f"{scheme}://{host}:{port}{normalized_path}"


class OpeningTimeSetupClient:
    """Single GET against the setup endpoint; no retry, the next poll retries."""

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.timeout_seconds,
                headers={"Accept": "application/json"},
            )
        return self._client

    def fetch_setup(self) -> OpeningTimeSetup:
        try:
            response = self._get_client().get(self.url)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise SourceError(f"Timed out fetching opening-time setup from {self.url}.") from exc
        except httpx.HTTPStatusError as exc:
            raise SourceError(
                f"Opening-time setup request to {self.url} failed with HTTP {exc.response.status_code}."
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceError(f"Could not fetch opening-time setup from {self.url}: {exc}") from exc

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise SourceError(f"Opening-time setup from {self.url} is not valid JSON.") from exc

        try:
            return OpeningTimeSetup.model_validate(payload)
        except ValidationError as exc:
            raise SourceError(
                f"Opening-time setup from {self.url} has an unexpected shape: "
                f"{exc.error_count()} validation error(s)."
            ) from exc

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> OpeningTimeSetupClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def day_schedule_from_setup(setup: OpeningTimeSetup, day: date) -> DaySchedule | None:
    weekday = js_weekday(day)
    entry = setup.day_values(weekday)
    if entry is None or not entry.periods:
        return None
    try:
        periods = tuple(Period(start=period.start, end=period.end) for period in entry.periods)
    except ScheduleError as exc:
        logger.warning("opening-time setup for weekday %s is invalid: %s", weekday, exc)
        return None
    return DaySchedule(day=day, weekday=weekday, periods=periods)


class HttpScheduleSource:
    """Schedule source backed by :class:`OpeningTimeSetupClient`.

    Fetch failures propagate as :class:`SourceError`; callers decide whether a
    failed cycle is fatal.
    """

    def __init__(self, client: OpeningTimeSetupClient) -> None:
        self._client = client

    @property
    def client(self) -> OpeningTimeSetupClient:
        return self._client

    def load(self, day: date) -> DaySchedule | None:
        setup = self._client.fetch_setup()
        return day_schedule_from_setup(setup, day)

    def close(self) -> None:
        self._client.close()
