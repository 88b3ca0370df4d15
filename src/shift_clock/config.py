"""Shared configuration contracts and validation helpers for shift-clock."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from pathlib import Path
import tomllib
from typing import Any

from platformdirs import user_config_dir

from .errors import ConfigError, ScheduleError
from .models import Period
from .sources.http import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_PROTOCOL,
    DEFAULT_SETUP_PATH,
    DEFAULT_TIMEOUT_SECONDS,
    build_setup_url,
)

VALID_SOURCE_KINDS = {"static", "http"}
VALID_PROTOCOLS = {"http", "https"}
VALID_OUTPUT_FORMATS = {"pretty", "plain", "json"}
DEFAULT_CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "SHIFT_CLOCK_CONFIG"

DEFAULT_CONFIG_TEMPLATE = """[widget]
refresh_seconds = 60
dashboard_title = ""
timezone = "UTC"
date_format = "%d/%m/%Y"

[source]
kind = "http"
protocol = "http"
host = "localhost"
port = 3000
path = "/app-setup/opening-time-setup"
timeout_seconds = 10.0

# Used when source.kind = "static".
[[periods]]
start = "08:00"
end = "12:00"

[[periods]]
start = "13:00"
end = "17:00"
"""


@dataclass(frozen=True)
class WidgetConfig:
    refresh_seconds: int = 60
    dashboard_title: str = ""
    timezone: str = "UTC"
    date_format: str = "%d/%m/%Y"
    debug: bool = False


@dataclass(frozen=True)
class SourceConfig:
    kind: str = "http"
    protocol: str = DEFAULT_PROTOCOL
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    path: str = DEFAULT_SETUP_PATH
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def url(self) -> str:
        return build_setup_url(self.protocol, self.host, self.port, self.path)


@dataclass(frozen=True)
class RuntimeConfig:
    widget: WidgetConfig = field(default_factory=WidgetConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    periods: tuple[Period, ...] = ()


def default_config() -> RuntimeConfig:
    return RuntimeConfig()


def default_config_toml() -> str:
    return DEFAULT_CONFIG_TEMPLATE


def resolve_config_path(config_path: str | Path | None = None) -> Path:
    if config_path:
        return Path(config_path).expanduser()

    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()

    config_dir = Path(user_config_dir("shift-clock", appauthor=False))
    return config_dir / DEFAULT_CONFIG_FILENAME


def init_default_config(config_path: str | Path | None = None, force: bool = False) -> Path:
    path = resolve_config_path(config_path)
    if path.exists() and path.is_dir():
        raise ConfigError(
            f"Config path '{path}' is a directory; expected a TOML file path (for example '{path / DEFAULT_CONFIG_FILENAME}')."
        )
    if path.exists() and not force:
        raise ConfigError(
            f"Config file already exists at '{path}'. Re-run with --force to overwrite."
        )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(default_config_toml(), encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Could not write config file at '{path}': {exc}. "
            "Check path permissions or choose a writable location with `--path`."
        ) from exc
    return path


def load_runtime_config(config_path: str | Path | None = None) -> RuntimeConfig:
    path = resolve_config_path(config_path)
    if not path.exists():
        raise ConfigError(
            f"Config file not found at '{path}'. Run `shift-clock config init --path \"{path}\"` to generate defaults."
        )
    if path.is_dir():
        raise ConfigError(
            f"Config path '{path}' is a directory; pass a file path ending in '{DEFAULT_CONFIG_FILENAME}'."
        )

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Could not read config file '{path}': {exc}. "
            "Check file permissions and that the path points to a readable TOML file."
        ) from exc

    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Config file '{path}' contains invalid TOML: {exc}. "
            "Fix the syntax or regenerate defaults with `shift-clock config init --force`."
        ) from exc
    return parse_runtime_config(raw)


def config_to_dict(config: RuntimeConfig) -> dict[str, Any]:
    return asdict(config)


def parse_runtime_config(data: dict[str, Any]) -> RuntimeConfig:
    widget_raw = _expect_table(data, "widget", default={})
    source_raw = _expect_table(data, "source", default={})
    periods_raw = data.get("periods", [])

    if not isinstance(periods_raw, list):
        raise ConfigError("Invalid [periods]: expected an array of tables (`[[periods]]`).")

    widget_config = WidgetConfig(
        refresh_seconds=_expect_positive_int(widget_raw, "widget.refresh_seconds", default=60),
        dashboard_title=_expect_string(widget_raw, "widget.dashboard_title", default=""),
        timezone=_expect_non_empty_string(widget_raw, "widget.timezone", "UTC"),
        date_format=_expect_non_empty_string(widget_raw, "widget.date_format", "%d/%m/%Y"),
        debug=_expect_bool(widget_raw, "widget.debug", default=False),
    )

    source_config = SourceConfig(
        kind=_expect_choice(source_raw, "source.kind", default="http", valid_values=VALID_SOURCE_KINDS),
        protocol=_expect_choice(
            source_raw, "source.protocol", default=DEFAULT_PROTOCOL, valid_values=VALID_PROTOCOLS
        ),
        host=_expect_non_empty_string(source_raw, "source.host", DEFAULT_HOST),
        port=_expect_positive_int(source_raw, "source.port", default=DEFAULT_PORT),
        path=_expect_non_empty_string(source_raw, "source.path", DEFAULT_SETUP_PATH),
        timeout_seconds=_expect_positive_float(
            source_raw, "source.timeout_seconds", default=DEFAULT_TIMEOUT_SECONDS
        ),
    )

    parsed_periods: list[Period] = []
    for index, period in enumerate(periods_raw):
        if not isinstance(period, dict):
            raise ConfigError(f"periods[{index}] must be a table, got {type(period).__name__}.")
        start = _expect_non_empty_string(period, f"periods[{index}].start", default=None)
        end = _expect_non_empty_string(period, f"periods[{index}].end", default=None)
        try:
            parsed_periods.append(Period(start=start, end=end))
        except ScheduleError as exc:
            raise ConfigError(f"Invalid periods[{index}]: {exc}") from exc

    if source_config.kind == "static" and not parsed_periods:
        raise ConfigError(
            "source.kind = \"static\" requires at least one [[periods]] table with start/end."
        )

    return RuntimeConfig(widget=widget_config, source=source_config, periods=tuple(parsed_periods))


def _expect_table(data: dict[str, Any], key: str, default: dict[str, Any]) -> dict[str, Any]:
    value = data.get(key, default)
    if not isinstance(value, dict):
        raise ConfigError(f"Invalid [{key}] table: expected table, got {type(value).__name__}.")
    return value


def _expect_string(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key.split(".")[-1], default)
    if not isinstance(value, str):
        raise ConfigError(f"Invalid value for '{key}': expected string.")
    return value


def _expect_non_empty_string(
    data: dict[str, Any], key: str, default: str | None
) -> str:
    if key.split(".")[-1] in data:
        value = data[key.split(".")[-1]]
    else:
        if default is None:
            raise ConfigError(f"Missing required value '{key}'.")
        value = default

    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Invalid value for '{key}': expected non-empty string.")
    return value


def _expect_positive_int(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key.split(".")[-1], default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"Invalid value for '{key}': expected positive integer.")
    return value


def _expect_positive_float(data: dict[str, Any], key: str, default: float) -> float:
    value = data.get(key.split(".")[-1], default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"Invalid value for '{key}': expected positive number of seconds.")
    return float(value)


def _expect_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key.split(".")[-1], default)
    if not isinstance(value, bool):
        raise ConfigError(f"Invalid value for '{key}': expected boolean true/false.")
    return value


def _expect_choice(
    data: dict[str, Any],
    key: str,
    default: str | None,
    valid_values: set[str],
) -> str:
    field_name = key.split(".")[-1]
    if field_name in data:
        value = data[field_name]
    else:
        if default is None:
            raise ConfigError(f"Missing required value '{key}'.")
        value = default

    if not isinstance(value, str) or value not in valid_values:
        choices = ", ".join(sorted(valid_values))
        raise ConfigError(f"Invalid value for '{key}': expected one of [{choices}].")
    return value
