from pathlib import Path

import pytest
from pytest import MonkeyPatch
from typer.testing import CliRunner

from battrack.cli import app
from battrack.models.sample import BatteryReading
from battrack.settings import UserSettings
from battrack.storage.history import load_history
from conftest import FakeReader, write_log

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, log_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(f'log_path: "{log_path}"\nchart_width: 400\nchart_height: 200\n')
    return path


def test_render_png(config_file: Path, log_path: Path, tmp_path: Path) -> None:
    write_log(log_path, "2025-5-3 8:0:0,8,0,50.00,m,discharging,1,1.00,1.00,1.00,1.00")
    out = tmp_path / "chart.png"

    result = runner.invoke(app, ["render", str(out), "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "Chart written to" in result.output
    assert out.exists()


def test_render_html(config_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "chart.html"

    result = runner.invoke(app, ["render", str(out), "--config", str(config_file), "--html"])

    assert result.exit_code == 0, result.output
    assert "<svg" in out.read_text(encoding="utf-8")


def test_invalid_config_exits_2(tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("sample_interval_seconds: 90\n")

    result = runner.invoke(app, ["render", str(tmp_path / "x.png"), "--config", str(bad)])

    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_record_once(
    monkeypatch: MonkeyPatch, config_file: Path, log_path: Path, reading: BatteryReading
) -> None:
    monkeypatch.setattr("battrack.cli.BatteryReader", lambda: FakeReader(reading))

    result = runner.invoke(app, ["record", "--once", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "50.00% (Charging)" in result.output
    points, info = load_history(log_path)
    assert len(points) == 1
    assert info is not None and info.model == "DELL 5XJ28"


def test_record_once_without_battery(monkeypatch: MonkeyPatch, config_file: Path) -> None:
    monkeypatch.setattr("battrack.cli.BatteryReader", lambda: FakeReader(None))

    result = runner.invoke(app, ["record", "--once", "--config", str(config_file)])

    assert result.exit_code == 1
    assert "No battery found" in result.output


def test_record_unwritable_log_fails_when_configured(
    monkeypatch: MonkeyPatch, tmp_path: Path, reading: BatteryReading
) -> None:
    blocked = tmp_path / "blocked"
    blocked.mkdir()
    config = tmp_path / "config.yaml"
    config.write_text(f'log_path: "{blocked}"\nfail_on_write_error: true\n')
    monkeypatch.setattr("battrack.cli.BatteryReader", lambda: FakeReader(reading))

    result = runner.invoke(app, ["record", "--once", "--config", str(config)])

    assert result.exit_code == 1
    assert "Cannot write" in result.output


def test_config_validate(config_file: Path) -> None:
    result = runner.invoke(app, ["config", "validate", str(config_file)])
    assert result.exit_code == 0
    assert "Config valid" in result.output


def test_config_validate_invalid(tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("refresh_interval_seconds: 3660\n")

    result = runner.invoke(app, ["config", "validate", str(bad)])

    assert result.exit_code == 1


def test_config_wizard(tmp_path: Path) -> None:
    dst = tmp_path / "config.yaml"
    log = tmp_path / "log.csv"

    answers = f"{log}\n90\n\n{log}\n300\n\n"
    result = runner.invoke(app, ["config", "wizard", str(dst)], input=answers)

    assert result.exit_code == 0, result.output
    assert "Config error" in result.output
    settings = UserSettings.load(dst)
    assert settings.log_path == log
    assert settings.sample_interval_seconds == 300
    assert settings.refresh_interval_seconds == 60
