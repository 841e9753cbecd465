"""Typer-based CLI application for belajar-orm."""

import logging
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated

import typer

import belajar_orm.cli as cli
from belajar_orm.cli.commands.db import db_app
from belajar_orm.cli.commands.init import init
from belajar_orm.cli.commands.stats import stats

# Configure logging for CLI output
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"belajar-orm {get_version('belajar-orm')}")
        raise typer.Exit()


# Main Typer app
app = typer.Typer(
    name="belajar-orm",
    help="belajar-orm CLI - manage the demo database.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main_callback(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config-path",
            "-cp",
            help="Path to configuration directory",
            envvar="BELAJAR_ORM_CONFIG_PATH",
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """belajar-orm CLI - manage the demo database.

    Global options are processed before any command.
    """
    # Set global config path (default: ./configs)
    cli.CONFIG_PATH = (config_path or Path.cwd() / "configs").resolve()


app.add_typer(db_app, name="db")

app.command(name="init")(init)
app.command(name="stats")(stats)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
