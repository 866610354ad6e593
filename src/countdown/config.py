"""Settings — default duration and tick interval from a JSON file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from countdown.core.timespec import TimeSpec, ValidationError, validate

_DEFAULT_CONFIG_DIR = Path.home() / ".config" / "countdown"
_SETTINGS_FILE = "settings.json"
_CONFIG_DIR_ENV = "COUNTDOWN_CONFIG_DIR"


class ConfigError(Exception):
    """Raised when the settings file cannot be read or holds invalid values."""


@dataclass(frozen=True)
class Settings:
    """Read-only user preferences.  The timer state itself is never saved."""

    default_hours: int = 0
    default_minutes: int = 5
    default_seconds: int = 0
    tick_interval_ms: int = 1000

    @property
    def default_spec(self) -> TimeSpec:
        return TimeSpec(self.default_hours, self.default_minutes, self.default_seconds)


def default_config_dir() -> Path:
    """Return ``$COUNTDOWN_CONFIG_DIR`` if set, else ``~/.config/countdown``."""
    override = os.environ.get(_CONFIG_DIR_ENV)
    return Path(override) if override else _DEFAULT_CONFIG_DIR


def load_settings(config_dir: Path | None = None) -> Settings:
    """Load ``<config_dir>/settings.json``, falling back to defaults.

    A missing file yields the defaults; unknown keys are ignored.
    """
    path = (config_dir if config_dir is not None else default_config_dir()) / _SETTINGS_FILE
    if not path.exists():
        return Settings()

    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")

    defaults = Settings()
    try:
        spec = validate(
            data.get("default_hours", defaults.default_hours),
            data.get("default_minutes", defaults.default_minutes),
            data.get("default_seconds", defaults.default_seconds),
        )
    except ValidationError as exc:
        raise ConfigError(f"invalid default duration in {path}: {exc}") from exc

    interval = data.get("tick_interval_ms", defaults.tick_interval_ms)
    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        raise ConfigError(f"tick_interval_ms must be a positive integer, got {interval!r}")

    return Settings(
        default_hours=spec.hours,
        default_minutes=spec.minutes,
        default_seconds=spec.seconds,
        tick_interval_ms=interval,
    )
