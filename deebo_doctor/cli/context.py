from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import typer

from deebo_doctor.checks import RunConfig
from deebo_doctor.core.config import (
    Settings,
    load_settings,
    load_settings_or_default,
    resolve_settings,
)
from deebo_doctor.core.errors import ErrorCode
from deebo_doctor.core.result import Err
from deebo_doctor.output.console import ConsoleProtocol, RichConsole
from deebo_doctor.platform.paths import user_config_dir

SETTINGS_FILENAME = "config.toml"


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    run_config: RunConfig
    console: ConsoleProtocol


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    from rich.console import Console
    from rich.logging import RichHandler

    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[handler],
        force=True,
    )


def build_context(
    *,
    deebo_path: Path | None = None,
    timeout: float | None = None,
    settings_file: Path | None = None,
) -> CLIContext:
    if settings_file is not None:
        loaded = load_settings(settings_file)
    else:
        loaded = load_settings_or_default(user_config_dir() / SETTINGS_FILENAME)
    if isinstance(loaded, Err):
        typer.echo(f"error: {loaded.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    resolved = resolve_settings(loaded.value, os.environ, deebo_path=deebo_path, timeout=timeout)
    if isinstance(resolved, Err):
        typer.echo(f"error: {resolved.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    settings = resolved.value
    run_config = RunConfig.from_environment(settings.deebo_path, timeout=settings.timeout)
    return CLIContext(settings=settings, run_config=run_config, console=RichConsole())
