"""Reusable query scopes.

A scope is any callable taking a ``Select`` and returning a narrowed ``Select``,
so they compose freely and can be handed to ``GenericRepository.find``.

Example:
    >>> stmt = apply_scopes(select(Wallet), sultan_wallet, paginate(page=2, size=10))
"""

from collections.abc import Callable

from sqlalchemy import Select

from belajar_orm.orm.schema import Wallet

Scope = Callable[[Select], Select]

SULTAN_BALANCE = 1_000_000


def apply_scopes(stmt: Select, *scopes: Scope) -> Select:
    for scope in scopes:
        stmt = scope(stmt)
    return stmt


def broke_wallet(stmt: Select) -> Select:
    """Wallets with nothing left."""
    return stmt.where(Wallet.balance == 0)


def sultan_wallet(stmt: Select) -> Select:
    """Wallets holding at least a million."""
    return stmt.where(Wallet.balance >= SULTAN_BALANCE)


def paginate(page: int, size: int) -> Scope:
    """Build a scope returning the 1-based ``page`` of ``size`` rows."""
    if page < 1:
        page = 1
    if size < 1:
        raise ValueError(f"Page size must be positive, got {size}")  # noqa: TRY003

    def _paginate(stmt: Select) -> Select:
        return stmt.offset((page - 1) * size).limit(size)

    return _paginate
