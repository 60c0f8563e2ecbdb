from __future__ import annotations

import typer

from deebo_doctor.cli.commands.check import check

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)

# Single command: `deebo-doctor [OPTIONS]` runs every check.
app.command()(check)


def main() -> None:
    app()
