"""CLI entry point for countdown.

Uses Click to expose the ``countdown`` command group: ``validate`` checks a
duration, ``run`` counts down in the terminal, ``gui`` opens the window.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Callable, Optional, TypeVar

import click

import countdown
from countdown.config import ConfigError, Settings, load_settings
from countdown.core.engine import InvalidStateError, TimerEngine, TimerSnapshot
from countdown.core.timespec import ValidationError, format_hms, validate

T = TypeVar("T")


def _run(action: Callable[[], T]) -> T:
    """Execute *action*, converting domain errors to a CLI error.

    On ``InvalidStateError``, ``ValidationError`` or ``ConfigError`` the
    message is printed to stderr and the process exits with code 1.
    """
    try:
        return action()
    except ValidationError as exc:
        for error in exc.errors:
            click.echo(error.message, err=True)
        sys.exit(1)
    except (InvalidStateError, ConfigError) as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)


def _settings() -> Settings:
    return _run(load_settings)


@click.group()
@click.version_option(version=countdown.__version__, prog_name="countdown")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """countdown: an hours/minutes/seconds countdown timer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="validate")
@click.argument("hours")
@click.argument("minutes")
@click.argument("seconds")
def validate_cmd(hours: str, minutes: str, seconds: str) -> None:
    """Check HOURS MINUTES SECONDS and print the resulting duration."""
    spec = _run(lambda: validate(hours, minutes, seconds))
    total = spec.total_seconds()
    click.echo(f"{format_hms(total)} ({total} seconds)")


@cli.command()
@click.argument("hours", required=False)
@click.argument("minutes", required=False)
@click.argument("seconds", required=False)
def run(hours: Optional[str], minutes: Optional[str], seconds: Optional[str]) -> None:
    """Count down HOURS MINUTES SECONDS in the terminal.

    Omitted values fall back to the configured default duration.
    Press Ctrl-C to stop.
    """
    settings = _settings()
    engine = TimerEngine(settings.default_spec)
    _run(
        lambda: engine.configure(
            settings.default_hours if hours is None else hours,
            settings.default_minutes if minutes is None else minutes,
            settings.default_seconds if seconds is None else seconds,
        )
    )

    def _show(snap: TimerSnapshot) -> None:
        if snap.is_running or snap.is_completed:
            click.echo(snap.display)

    engine.set_observer(_show)
    _run(engine.start)

    interval = settings.tick_interval_ms / 1000.0
    try:
        while engine.current_snapshot().is_running:
            time.sleep(interval)
            engine.tick()
    except KeyboardInterrupt:
        engine.pause()
        click.echo(f"Stopped with {engine.current_snapshot().display} remaining", err=True)
        sys.exit(130)

    click.echo("Time's up!")


@cli.command()
def gui() -> None:
    """Open the desktop countdown window."""
    settings = _settings()
    from countdown.ui.window import run as run_window

    run_window(settings)
