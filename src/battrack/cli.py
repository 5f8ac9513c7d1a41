"""Battery Life Tracker CLI application.

This module provides the command-line interface: the chart window, the
background recorder, one-shot rendering and configuration utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final

import typer
import yaml
from pydantic import ValidationError

from battrack.controller import BatteryTracker, configure_logging
from battrack.errors import RecorderError
from battrack.scheduling import Sampler
from battrack.settings.application import ApplicationSettings
from battrack.settings.user import UserSettings
from battrack.storage.recorder import Recorder
from battrack.system.battery import BatteryReader

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Battery Life Tracker CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "battrack.cli"

CONFIG_OPTION = typer.Option(
    None, "--config", "-c", exists=True, dir_okay=False, help="Path to config.yaml"
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
SAMPLE_OPTION = typer.Option(
    False, "--sample", "-s", help="Sample the battery in-process instead of reading the log"
)
ONCE_OPTION = typer.Option(False, "--once", "-1", help="Take one sample then exit")
HTML_OPTION = typer.Option(False, "--html", help="Render the HTML dashboard instead of a PNG")
OUTPUT_ARGUMENT = typer.Argument(..., dir_okay=False, help="Output file")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")


def _load_settings(config: Path | None) -> ApplicationSettings:
    try:
        return ApplicationSettings(UserSettings.load(config))
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc


@app.command()
def run(
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
    sample: bool = SAMPLE_OPTION,
) -> None:
    """Open the battery chart window."""
    configure_logging(debug)
    settings = _load_settings(config)

    # tkinter is only needed for the window
    from battrack.display.window import TrackerWindow

    TrackerWindow(BatteryTracker(settings, sample=sample)).run()


@app.command()
def record(
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
    once: bool = ONCE_OPTION,
) -> None:
    """Sample the battery and append each sample to the log."""
    configure_logging(debug)
    settings = _load_settings(config)
    sampler = Sampler(
        BatteryReader(),
        settings.sample_interval,
        recorder=Recorder(settings.log_path),
        fail_on_error=settings.user.fail_on_write_error,
    )

    try:
        if once:
            sample = sampler.tick()
            if sample is None:
                typer.echo("No battery found", err=True)
                raise typer.Exit(code=1)
            typer.echo(f"{sample.percentage:.2f}% ({sample.state.label}) → {settings.log_path}")
            return

        logger.info(
            "Recording to %s every %s", settings.log_path, settings.sample_interval.describe()
        )
        sampler.run()
    except RecorderError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def render(
    output: Path = OUTPUT_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
    html: bool = HTML_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Render the chart from the log once, to a PNG or an HTML page."""
    configure_logging(debug)
    settings = _load_settings(config)
    tracker = BatteryTracker(settings)
    tracker.refresh()

    written = tracker.write_html(output) if html else tracker.write_image(output)
    typer.echo(f"Chart written to {written}")


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")
    defaults = UserSettings()

    while True:
        data: dict[str, Any] = {
            "log_path": typer.prompt("Sample log path", default=str(defaults.log_path)),
            "sample_interval_seconds": typer.prompt(
                "Sampling interval (seconds)", default=defaults.sample_interval_seconds, type=int
            ),
            "refresh_interval_seconds": typer.prompt(
                "Window reload interval (seconds)", default=defaults.refresh_interval_seconds, type=int
            ),
        }
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(
        yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False), encoding="utf-8"
    )
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
