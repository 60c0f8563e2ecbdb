from __future__ import annotations

import json
from pathlib import Path

import typer

from deebo_doctor import __version__
from deebo_doctor.checks import CheckResult, CheckStatus
from deebo_doctor.cli.context import build_context, configure_logging
from deebo_doctor.output.console import ConsoleProtocol, Style
from deebo_doctor.services.doctor import DoctorReport, DoctorService


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def check(
    deebo_path: Path | None = typer.Option(
        None,
        "--deebo-path",
        help="deebo installation root (default: $DEEBO_PATH, settings file, or cwd)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show details for passing checks and debug logs."
    ),
    sequential: bool = typer.Option(
        False, "--sequential", help="Run checks one after another instead of concurrently."
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Seconds allowed for each external command."
    ),
    settings_file: Path | None = typer.Option(
        None, "--config", help="Settings file (default: user config dir/config.toml)."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Check that deebo's prerequisites and configuration are in place."""
    configure_logging(verbose)
    ctx = build_context(deebo_path=deebo_path, timeout=timeout, settings_file=settings_file)

    service = DoctorService(config=ctx.run_config, concurrent=not sequential)
    report = service.run_sync()

    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in report.results], indent=2))
    else:
        ctx.console.print(f"deebo path: {ctx.run_config.deebo_path}", Style.DIM)
        ctx.console.print(f"platform: {ctx.run_config.platform}", Style.DIM)
        render_report(ctx.console, report, verbose=verbose)

    code = report.exit_code()
    if not code.is_success:
        raise typer.Exit(code=int(code))


def render_report(console: ConsoleProtocol, report: DoctorReport, *, verbose: bool = False) -> None:
    console.header("deebo doctor")
    for r in report.results:
        _print_result(console, r, verbose=verbose)

    console.newline()
    summary = (
        f"{report.count(CheckStatus.PASS)} passed, "
        f"{report.count(CheckStatus.WARN)} warnings, "
        f"{report.count(CheckStatus.FAIL)} failed"
    )
    console.print(summary, Style.BOLD)


def _print_result(console: ConsoleProtocol, r: CheckResult, *, verbose: bool) -> None:
    console.badge(r.status.name, f"{r.name}: {r.message}", _style_for_status(r.status))
    if r.details and (verbose or r.status != CheckStatus.PASS):
        for line in r.details.splitlines():
            console.print(f"    {line}", Style.DIM)


def _style_for_status(status: CheckStatus) -> Style:
    if status == CheckStatus.PASS:
        return Style.PASS
    if status == CheckStatus.WARN:
        return Style.WARN
    return Style.FAIL
