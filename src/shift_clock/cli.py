"""Typer CLI for shift-clock workflows."""

from __future__ import annotations

from datetime import date, datetime
import json
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import typer

from . import __version__
from .config import (
    VALID_OUTPUT_FORMATS,
    config_to_dict,
    init_default_config,
    load_runtime_config,
    resolve_config_path,
)
from .diagnostics.events import JsonlEventLogger
from .errors import ConfigError, RenderError, ScheduleError, SchedulerError, SourceError
from .logging import configure_logging
from .models import Period, TimeWindow, js_weekday
from .render import render_clock, render_window
from .runtime import build_configured_widget, build_schedule_source, run_configured_watch
from .schedule.resolver import resolve_window
from .scheduler.loop import PollRunResult
from .sources.http import OpeningTimeSetupClient
from .sources.query import extract_shift_schedule
from .sources.static import parse_period_spec

app = typer.Typer(help="Live clock that keeps a dashboard time range on the shift schedule.")

config_app = typer.Typer(help="Config commands.")
setup_app = typer.Typer(help="Opening-time setup commands.")

app.add_typer(config_app, name="config")
app.add_typer(setup_app, name="setup")

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


@config_app.command("init")
def config_init(
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite existing config file."),
) -> None:
    try:
        written_path = init_default_config(path, force=force)
    except ConfigError as exc:
        typer.secho(f"Config init failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc

    typer.echo(f"Wrote default config to {written_path}")


@config_app.command("show")
def config_show(
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Render resolved config as JSON."),
) -> None:
    resolved_path = resolve_config_path(path)
    try:
        config = load_runtime_config(path)
    except ConfigError as exc:
        typer.secho(f"Config show failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc

    payload = {
        "path": str(resolved_path),
        "config": config_to_dict(config),
    }
    if as_json:
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        return

    typer.echo(f"Resolved config path: {payload['path']}")
    typer.echo(f"Refresh seconds: {config.widget.refresh_seconds}")
    typer.echo(f"Timezone: {config.widget.timezone}")
    typer.echo(f"Source: {config.source.kind}")
    if config.source.kind == "http":
        typer.echo(f"Setup URL: {config.source.url}")
    else:
        typer.echo(f"Periods: {_periods_label(config.periods)}")


@app.command("resolve")
def resolve(
    periods: str | None = typer.Option(
        None, "--periods", help="Comma-separated periods such as 08:00-12:00,13:00-17:00."
    ),
    query_file: Path | None = typer.Option(
        None, "--query-file", help="JSON query result holding a 'shiftSchedule' frame."
    ),
    day: str | None = typer.Option(None, "--day", help="Calendar day YYYY-MM-DD (defaults to today)."),
    now: str | None = typer.Option(None, "--now", help="ISO timestamp to resolve at (defaults to now)."),
    timezone_name: str = typer.Option("UTC", "--timezone", help="IANA timezone for naive --now values."),
    output_format: str = typer.Option("pretty", "--format", help="Output format: pretty|plain|json."),
) -> None:
    try:
        zone = _zone(timezone_name)
        moment = _parse_now(now, zone)
        target_day = _parse_day(day) if day else moment.date()
        schedule = _cli_periods(periods, query_file)
        window = resolve_window(schedule, target_day, moment)
        if window is None:
            raise ScheduleError("No periods to resolve.")
        typer.echo(render_window(window, _checked_format(output_format)))
    except (ConfigError, ScheduleError, RenderError) as exc:
        typer.secho(f"Resolve failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc


@setup_app.command("show")
def setup_show(
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    day: str | None = typer.Option(None, "--day", help="Only show the given day YYYY-MM-DD."),
    as_json: bool = typer.Option(False, "--json", help="Render the fetched setup as JSON."),
) -> None:
    try:
        config = load_runtime_config(path)
        target_weekday = js_weekday(_parse_day(day)) if day else None
        with OpeningTimeSetupClient(
            config.source.url, timeout_seconds=config.source.timeout_seconds
        ) as client:
            setup = client.fetch_setup()
    except (ConfigError, ScheduleError, SourceError) as exc:
        typer.secho(f"Setup show failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc

    week = [
        entry
        for entry in sorted(setup.value.week, key=lambda item: item.week_day)
        if target_weekday is None or entry.week_day == target_weekday
    ]
    if as_json:
        typer.echo(
            json.dumps(
                {
                    "key": setup.key,
                    "model": setup.value.model,
                    "week": [entry.model_dump(by_alias=True) for entry in week],
                },
                indent=2,
                sort_keys=True,
            )
        )
        return

    typer.echo(f"Setup: {setup.key}")
    if not week:
        typer.echo("No days configured.")
    for entry in week:
        label = entry.day or WEEKDAY_NAMES[entry.week_day]
        periods = ", ".join(f"{period.start}-{period.end}" for period in entry.periods) or "closed"
        typer.echo(f"- {label}: {periods}")


@app.command("clock")
def clock(
    ctx: typer.Context,
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    now: str | None = typer.Option(None, "--now", help="ISO timestamp to display (defaults to now)."),
    output_format: str = typer.Option("pretty", "--format", help="Output format: pretty|plain|json."),
) -> None:
    try:
        config = load_runtime_config(path)
        resolved_format = _checked_format(output_format)
        moment = _parse_now(now, _zone(config.widget.timezone))
        source = build_schedule_source(config)
        widget = build_configured_widget(
            config,
            lambda _window: None,
            source=source,
            event_logger=_event_logger(ctx),
        )
        try:
            widget.refresh_source(now=moment)
            face = widget.clock_face(now=moment)
        finally:
            widget.dispose()
            _close_source(source)
    except (ConfigError, RenderError) as exc:
        typer.secho(f"Clock failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc

    if face is None:
        typer.secho("No valid schedule available yet; clock hidden.", err=True, fg=typer.colors.YELLOW)
        raise typer.Exit(1)
    typer.echo(render_clock(face, resolved_format))


@app.command("watch")
def watch(
    ctx: typer.Context,
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    interval_seconds: int | None = typer.Option(
        None, "--interval-seconds", min=1, help="Poll interval (defaults to widget.refresh_seconds)."
    ),
    max_cycles: int | None = typer.Option(
        None, "--max-cycles", min=1, help="Stop after this many cycles (default: run until Ctrl-C)."
    ),
    output_format: str = typer.Option("plain", "--format", help="Window output format: pretty|plain|json."),
    as_json: bool = typer.Option(False, "--json", help="Render the run summary as JSON."),
) -> None:
    try:
        config = load_runtime_config(path)
        resolved_format = _checked_format(output_format)

        def _emit(window: TimeWindow) -> None:
            typer.echo(render_window(window, resolved_format))

        result = run_configured_watch(
            config,
            _emit,
            interval_seconds=interval_seconds,
            max_cycles=max_cycles,
            event_logger=_event_logger(ctx),
        )
    except (ConfigError, SchedulerError, RenderError) as exc:
        typer.secho(f"Watch failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc

    payload = _watch_result_payload(result)
    if as_json:
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
    else:
        typer.echo(
            f"Watch completed: {result.cycles_completed} cycle(s), "
            f"emitted={result.emitted_count} skipped={result.skipped_count} "
            f"interrupted={str(result.interrupted).lower()}.",
            err=True,
        )
    if result.interrupted:
        raise typer.Exit(130)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show shift-clock version and exit."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    events_path: Path | None = typer.Option(
        None, "--events-path", help="Append JSONL debug events to this file."
    ),
) -> None:
    ctx.obj = {
        "debug": debug,
        "events_path": events_path,
    }
    configure_logging(debug)
    if version:
        typer.echo(__version__)
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _event_logger(ctx: typer.Context | None) -> JsonlEventLogger | None:
    if ctx is None or not isinstance(ctx.obj, dict):
        return None
    events_path = ctx.obj.get("events_path")
    if events_path is None:
        return None
    return JsonlEventLogger(events_path)


def _close_source(source: object) -> None:
    close = getattr(source, "close", None)
    if callable(close):
        close()


def _cli_periods(raw_periods: str | None, query_file: Path | None) -> tuple[Period, ...]:
    if raw_periods and query_file is not None:
        raise ConfigError("Pass either --periods or --query-file, not both.")
    if raw_periods:
        return parse_period_spec(raw_periods)
    if query_file is None:
        raise ConfigError("Pass --periods or --query-file to describe the schedule.")
    try:
        payload = json.loads(query_file.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Could not read query file '{query_file}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Query file '{query_file}' is not valid JSON: {exc}") from exc
    periods = extract_shift_schedule(payload) if isinstance(payload, dict) else None
    if periods is None:
        raise ScheduleError(
            f"Query file '{query_file}' has no usable 'shiftSchedule' frame with start/end fields."
        )
    return periods


def _zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Invalid timezone '{name}'. Use an IANA timezone like 'UTC'.") from exc


def _parse_now(raw: str | None, zone: ZoneInfo) -> datetime:
    if raw is None:
        return datetime.now(zone)
    try:
        value = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid --now '{raw}': expected an ISO timestamp.") from exc
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value


def _parse_day(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid --day '{raw}': expected YYYY-MM-DD.") from exc


def _checked_format(output_format: str) -> str:
    if output_format not in VALID_OUTPUT_FORMATS:
        supported = ", ".join(sorted(VALID_OUTPUT_FORMATS))
        raise RenderError(f"Invalid output format '{output_format}'. Supported formats: {supported}.")
    return output_format


def _periods_label(periods: tuple[Period, ...]) -> str:
    if not periods:
        return "none"
    return ", ".join(f"{period.start}-{period.end}" for period in periods)


def _watch_result_payload(result: PollRunResult) -> dict[str, object]:
    return {
        "cycles_completed": result.cycles_completed,
        "emitted_count": result.emitted_count,
        "skipped_count": result.skipped_count,
        "interrupted": result.interrupted,
        "cycles": [
            {
                "cycle": cycle.cycle,
                "started_at": cycle.started_at.isoformat(),
                "next_run_at": cycle.next_run_at.isoformat() if cycle.next_run_at else None,
                "sleep_seconds": cycle.sleep_seconds,
                "emitted": cycle.emitted,
                "skipped_reason": cycle.skipped_reason,
                "from": cycle.window_from_ms,
                "to": cycle.window_to_ms,
            }
            for cycle in result.cycles
        ],
    }
