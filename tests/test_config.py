"""Tests for loading Settings from settings.json."""

import json
from pathlib import Path

import pytest

from countdown.config import ConfigError, Settings, default_config_dir, load_settings
from countdown.core.timespec import TimeSpec, ValidationError


def _write(config_dir: Path, data: object) -> None:
    (config_dir / "settings.json").write_text(json.dumps(data))


class TestLoadSettings:
    """load_settings() reads <config_dir>/settings.json."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path)
        assert settings == Settings()
        assert settings.default_spec == TimeSpec(0, 5, 0)
        assert settings.tick_interval_ms == 1000

    def test_reads_values(self, tmp_path: Path) -> None:
        _write(tmp_path, {"default_hours": 1, "default_minutes": 2, "default_seconds": 3, "tick_interval_ms": 500})
        settings = load_settings(tmp_path)
        assert settings.default_spec == TimeSpec(1, 2, 3)
        assert settings.tick_interval_ms == 500

    def test_partial_file_keeps_other_defaults(self, tmp_path: Path) -> None:
        _write(tmp_path, {"default_seconds": 30})
        settings = load_settings(tmp_path)
        assert settings.default_spec == TimeSpec(0, 5, 30)

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        _write(tmp_path, {"theme": "dark"})
        assert load_settings(tmp_path) == Settings()

    def test_malformed_json(self, tmp_path: Path) -> None:
        (tmp_path / "settings.json").write_text("{not json")
        with pytest.raises(ConfigError):
            load_settings(tmp_path)

    def test_non_object(self, tmp_path: Path) -> None:
        _write(tmp_path, [1, 2, 3])
        with pytest.raises(ConfigError):
            load_settings(tmp_path)

    def test_out_of_range_default(self, tmp_path: Path) -> None:
        _write(tmp_path, {"default_minutes": 60})
        with pytest.raises(ConfigError, match="Minutes must be between 0 and 59"):
            load_settings(tmp_path)

    def test_out_of_bounds_settings_have_no_spec(self) -> None:
        with pytest.raises(ValidationError):
            Settings(default_hours=99).default_spec

    @pytest.mark.parametrize("interval", [0, -5, "1000", 1.5, True])
    def test_invalid_interval(self, tmp_path: Path, interval: object) -> None:
        _write(tmp_path, {"tick_interval_ms": interval})
        with pytest.raises(ConfigError):
            load_settings(tmp_path)


class TestDefaultConfigDir:
    """COUNTDOWN_CONFIG_DIR overrides ~/.config/countdown."""

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COUNTDOWN_CONFIG_DIR", str(tmp_path))
        assert default_config_dir() == tmp_path

    def test_home_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("COUNTDOWN_CONFIG_DIR", raising=False)
        assert default_config_dir() == Path.home() / ".config" / "countdown"

    def test_load_uses_env_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COUNTDOWN_CONFIG_DIR", str(tmp_path))
        _write(tmp_path, {"default_hours": 2})
        assert load_settings().default_hours == 2
