"""Config init/show defaults and validation behavior."""

from __future__ import annotations

from pathlib import Path

import pytest

from shift_clock.config import (
    default_config,
    default_config_toml,
    init_default_config,
    load_runtime_config,
    resolve_config_path,
)
from shift_clock.errors import ConfigError
from shift_clock.models import Period


def test_resolve_config_path_uses_explicit_path() -> None:
    path = resolve_config_path("~/tmp/shift-clock-test.toml")
    assert str(path).endswith("shift-clock-test.toml")


def test_resolve_config_path_uses_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_path = tmp_path / "env-config.toml"
    monkeypatch.setenv("SHIFT_CLOCK_CONFIG", str(env_path))
    assert resolve_config_path() == env_path


def test_resolve_config_path_defaults_to_platform_dir(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHIFT_CLOCK_CONFIG", raising=False)
    path = resolve_config_path()
    assert path.name == "config.toml"
    assert path.parent.name == "shift-clock"


def test_init_default_config_writes_template(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    written = init_default_config(config_path)
    assert written == config_path
    assert default_config_toml().strip() in config_path.read_text(encoding="utf-8")


def test_init_default_config_requires_force_for_overwrite(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("existing", encoding="utf-8")
    with pytest.raises(ConfigError, match="--force"):
        init_default_config(config_path)
    assert init_default_config(config_path, force=True) == config_path


def test_template_round_trips_to_defaults(tmp_path: Path) -> None:
    config_path = init_default_config(tmp_path / "config.toml")
    config = load_runtime_config(config_path)

    assert config.widget == default_config().widget
    assert config.source == default_config().source
    assert config.source.url == "http://localhost:3000/app-setup/opening-time-setup"
    assert config.periods == (Period(start="08:00", end="12:00"), Period(start="13:00", end="17:00"))


def test_load_runtime_config_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Run `shift-clock config init"):
        load_runtime_config(tmp_path / "missing.toml")


def test_load_runtime_config_reports_directory(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="is a directory"):
        load_runtime_config(tmp_path)


def test_load_runtime_config_reports_invalid_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("[widget\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid TOML"):
        load_runtime_config(config_path)


@pytest.mark.parametrize(
    ("body", "key"),
    [
        ("[widget]\nrefresh_seconds = 0\n", "widget.refresh_seconds"),
        ("[widget]\nrefresh_seconds = true\n", "widget.refresh_seconds"),
        ("[widget]\ndashboard_title = 3\n", "widget.dashboard_title"),
        ("[widget]\ntimezone = \"\"\n", "widget.timezone"),
        ("[source]\nkind = \"ftp\"\n", "source.kind"),
        ("[source]\nprotocol = \"gopher\"\n", "source.protocol"),
        ("[source]\nport = -1\n", "source.port"),
        ("[source]\ntimeout_seconds = 0\n", "source.timeout_seconds"),
    ],
)
def test_load_runtime_config_reports_invalid_values(tmp_path: Path, body: str, key: str) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError, match=key.replace(".", r"\.")):
        load_runtime_config(config_path)


def test_load_runtime_config_validates_periods(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """[[periods]]
start = "18:00"
end = "06:00"
""",
        encoding="utf-8",
    )
    with pytest.raises(ConfigError, match=r"periods\[0\]"):
        load_runtime_config(config_path)


def test_static_source_requires_periods(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[source]\nkind = "static"\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="requires at least one"):
        load_runtime_config(config_path)


def test_load_runtime_config_accepts_partial_tables(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """[widget]
refresh_seconds = 15
dashboard_title = "Atelier"

[source]
host = "plant.local"
timeout_seconds = 2
""",
        encoding="utf-8",
    )
    config = load_runtime_config(config_path)
    assert config.widget.refresh_seconds == 15
    assert config.widget.dashboard_title == "Atelier"
    assert config.source.timeout_seconds == 2.0
    assert config.source.url == "http://plant.local:3000/app-setup/opening-time-setup"
    assert config.periods == ()
