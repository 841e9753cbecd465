"""stats command - Show row counts and wallet statistics."""

import typer

from belajar_orm.orm.service import WalletService
from belajar_orm.orm.uow import BelajarUnitOfWork

COUNTED_REPOSITORIES = ["users", "wallets", "addresses", "products", "todos", "user_logs", "guest_books"]


def stats() -> None:
    """Show how many live rows each table holds, then balance statistics.

    Examples:
        belajar-orm stats
    """
    from belajar_orm.orm.connection import DBConnection

    try:
        session_factory = DBConnection.from_config().get_session_factory()
    except FileNotFoundError:
        typer.echo("Config file not found. Run 'belajar-orm init' first.", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"{'Table':<20} {'Rows':>10}")
    typer.echo("-" * 31)
    with BelajarUnitOfWork(session_factory) as uow:
        for name in COUNTED_REPOSITORIES:
            typer.echo(f"{name:<20} {getattr(uow, name).count():>10,}")

    result = WalletService(session_factory).statistics()
    typer.echo("-" * 31)
    typer.echo(f"{'Total balance':<20} {result.total_balance:>10,}")
    typer.echo(f"{'Min balance':<20} {result.min_balance:>10,}")
    typer.echo(f"{'Max balance':<20} {result.max_balance:>10,}")
    typer.echo(f"{'Avg balance':<20} {result.avg_balance:>10,.2f}")
