"""db commands - Create, drop, migrate and reset the configured database."""

from typing import Annotated

import typer

SYSTEM_DATABASES = {"postgres", "template0", "template1"}

db_app = typer.Typer(
    name="db",
    help="Manage the configured PostgreSQL database and its tables.",
)

YesOption = Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompts")]


def _load_connection():
    from belajar_orm.orm.connection import DBConnection

    try:
        return DBConnection.from_config()
    except FileNotFoundError:
        typer.echo("Config file not found. Run 'belajar-orm init' first.", err=True)
        raise typer.Exit(1) from None


def _confirm(message: str, yes: bool) -> None:
    if not yes and not typer.confirm(message):
        typer.echo("Aborted.")
        raise typer.Exit(0)


@db_app.command(name="create")
def create_database_cmd() -> None:
    """Create the database named in db.yaml if it does not exist.

    Examples:
        belajar-orm db create
    """
    db_conn = _load_connection()
    try:
        created = db_conn.create_database()
    except (RuntimeError, ValueError) as e:
        typer.echo(f"Create failed: {e}", err=True)
        raise typer.Exit(1) from None

    if created:
        typer.echo(f"Database '{db_conn.database}' created successfully.")
    else:
        typer.echo(f"Database '{db_conn.database}' already exists.")


@db_app.command(name="drop")
def drop_database_cmd(yes: YesOption = False) -> None:
    """Drop the database named in db.yaml.

    Examples:
        belajar-orm db drop
        belajar-orm db drop --yes
    """
    db_conn = _load_connection()
    if db_conn.database in SYSTEM_DATABASES:
        typer.echo(f"Refusing to drop protected system database '{db_conn.database}'.", err=True)
        raise typer.Exit(1)

    _confirm(f"This will permanently DROP database '{db_conn.database}'. Continue?", yes)

    try:
        db_conn.terminate_connections()
        db_conn.drop_database()
    except (RuntimeError, ValueError) as e:
        typer.echo(f"Drop failed: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"Database '{db_conn.database}' dropped successfully.")


@db_app.command(name="migrate")
def migrate_cmd() -> None:
    """Create every table that does not exist yet.

    Examples:
        belajar-orm db migrate
    """
    db_conn = _load_connection()
    db_conn.create_schema()
    typer.echo(f"Tables: {', '.join(db_conn.get_table_names())}")


@db_app.command(name="reset")
def reset_cmd(yes: YesOption = False) -> None:
    """Drop every table, losing all rows.

    Examples:
        belajar-orm db reset --yes
    """
    db_conn = _load_connection()
    _confirm(f"This will DROP all tables in '{db_conn.database}'. Continue?", yes)
    db_conn.drop_schema()
    typer.echo("All tables dropped.")
