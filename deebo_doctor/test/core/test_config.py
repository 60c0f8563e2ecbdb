"""Tests for settings loading and resolution."""

from __future__ import annotations

from pathlib import Path

from deebo_doctor.core.config import (
    DEFAULT_TIMEOUT,
    Settings,
    load_settings,
    load_settings_or_default,
    resolve_settings,
)
from deebo_doctor.core.result import Err, Ok


class TestLoadSettings:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[doctor]\ndeebo_path = "/opt/deebo"\ntimeout = 12\n', encoding="utf-8")

        result = load_settings(path)

        assert isinstance(result, Ok)
        assert result.value == Settings(deebo_path=Path("/opt/deebo"), timeout=12.0)

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("", encoding="utf-8")

        result = load_settings(path)

        assert isinstance(result, Ok)
        assert result.value == Settings()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[doctor\n", encoding="utf-8")

        result = load_settings(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_non_positive_timeout(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[doctor]\ntimeout = 0\n", encoding="utf-8")

        result = load_settings(path)

        assert isinstance(result, Err)
        assert result.error.path == path

    def test_missing_file_is_error(self, tmp_path: Path) -> None:
        assert isinstance(load_settings(tmp_path / "nope.toml"), Err)

    def test_missing_file_or_default(self, tmp_path: Path) -> None:
        result = load_settings_or_default(tmp_path / "nope.toml")
        assert result == Ok(Settings())


class TestResolveSettings:
    def test_defaults_to_cwd(self, tmp_path: Path) -> None:
        result = resolve_settings(Settings(), {}, cwd=tmp_path)

        assert isinstance(result, Ok)
        assert result.value.deebo_path == tmp_path
        assert result.value.timeout == DEFAULT_TIMEOUT

    def test_environment_overrides_file(self, tmp_path: Path) -> None:
        env = {"DEEBO_PATH": str(tmp_path / "env"), "DEEBO_DOCTOR_TIMEOUT": "7.5"}
        result = resolve_settings(Settings(deebo_path=tmp_path / "file", timeout=3), env)

        assert isinstance(result, Ok)
        assert result.value == Settings(deebo_path=tmp_path / "env", timeout=7.5)

    def test_cli_overrides_environment(self, tmp_path: Path) -> None:
        env = {"DEEBO_PATH": str(tmp_path / "env")}
        result = resolve_settings(Settings(), env, deebo_path=tmp_path / "cli", timeout=2)

        assert isinstance(result, Ok)
        assert result.value == Settings(deebo_path=tmp_path / "cli", timeout=2)

    def test_bad_environment_timeout(self) -> None:
        result = resolve_settings(Settings(), {"DEEBO_DOCTOR_TIMEOUT": "soon"})
        assert isinstance(result, Err)

    def test_negative_cli_timeout(self) -> None:
        result = resolve_settings(Settings(), {}, timeout=-1)
        assert isinstance(result, Err)
