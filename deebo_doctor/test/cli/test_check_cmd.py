from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from deebo_doctor import __version__
from deebo_doctor.checks import CheckResult
from deebo_doctor.cli.app import app
from deebo_doctor.cli.commands.check import render_report
from deebo_doctor.core.errors import ErrorCode
from deebo_doctor.output.console import MockConsole, Style
from deebo_doctor.services.doctor import DoctorReport

runner = CliRunner()


def _patch_report(monkeypatch: pytest.MonkeyPatch, *results: CheckResult) -> list[object]:
    import deebo_doctor.cli.commands.check as check_cmd

    seen: list[object] = []

    class FakeDoctorService:
        def __init__(self, **kwargs: object) -> None:
            seen.append(kwargs)

        def run_sync(self) -> DoctorReport:
            return DoctorReport(results=tuple(results))

    monkeypatch.setattr(check_cmd, "DoctorService", FakeDoctorService)
    monkeypatch.setattr(check_cmd, "configure_logging", lambda verbose: None)
    return seen


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("DEEBO_PATH", raising=False)
    monkeypatch.delenv("DEEBO_DOCTOR_TIMEOUT", raising=False)


def test_failures_exit_with_env_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_report(monkeypatch, CheckResult.failed("Git Installation", "Git not found"))

    result = runner.invoke(app, ["--deebo-path", str(tmp_path)])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)
    assert "Git not found" in result.output


def test_warnings_exit_cleanly(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_report(monkeypatch, CheckResult.warned("API Keys", "No valid API keys found"))

    result = runner.invoke(app, ["--deebo-path", str(tmp_path)])

    assert result.exit_code == 0


def test_json_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_report(monkeypatch, CheckResult.passed("Node.js Version", "Node v20.11.1 detected"))

    result = runner.invoke(app, ["--deebo-path", str(tmp_path), "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {
            "name": "Node.js Version",
            "status": "pass",
            "message": "Node v20.11.1 detected",
            "details": None,
        }
    ]


def test_options_reach_service(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = _patch_report(monkeypatch)

    result = runner.invoke(
        app, ["--deebo-path", str(tmp_path), "--sequential", "--timeout", "3"]
    )

    assert result.exit_code == 0
    kwargs = seen[0]
    assert isinstance(kwargs, dict)
    assert kwargs["concurrent"] is False
    assert kwargs["config"].deebo_path == tmp_path
    assert kwargs["config"].timeout == 3.0


def test_invalid_settings_file_is_user_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _patch_report(monkeypatch)
    settings = tmp_path / "bad.toml"
    settings.write_text("[doctor\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(settings)])

    assert result.exit_code == int(ErrorCode.USER_ERROR)


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


class TestRenderReport:
    def test_details_hidden_for_passing_checks(self) -> None:
        console = MockConsole()
        report = DoctorReport(
            results=(
                CheckResult.passed("Git Installation", "Git 2.43.0 detected", details="quiet"),
                CheckResult.failed("API Keys", "Could not read .env file", details="Expected at x"),
            )
        )

        render_report(console, report)

        assert console.find("quiet") == []
        assert console.find("Expected at x")[0].style == Style.DIM
        assert "1 passed, 0 warnings, 1 failed" in console.text

    def test_verbose_shows_all_details(self) -> None:
        console = MockConsole()
        report = DoctorReport(
            results=(CheckResult.passed("Git Installation", "ok", details="Path: /usr/bin/git"),)
        )

        render_report(console, report, verbose=True)

        assert console.find("Path: /usr/bin/git")
