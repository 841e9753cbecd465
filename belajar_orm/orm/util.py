"""Database management helpers for belajar-orm.

Creating and dropping a PostgreSQL database cannot happen inside a transaction,
so these helpers talk to the ``postgres`` maintenance database with psycopg directly
instead of going through SQLAlchemy.
"""

import logging

import psycopg
from psycopg import Connection, sql

logger = logging.getLogger("belajar-orm")


def _connect_admin(host: str, port: int, user: str, password: str) -> Connection:
    return psycopg.connect(host=host, port=port, user=user, password=password, dbname="postgres", autocommit=True)


def _database_exists(conn: Connection, database: str) -> bool:
    row = conn.execute("SELECT 1 FROM pg_database WHERE datname = %s", (database,)).fetchone()
    return row is not None


def create_database(
    host: str,
    user: str,
    password: str,
    database: str,
    port: int = 5432,
    template: str = "template0",
    encoding: str = "UTF8",
) -> bool:
    """Create ``database`` unless it already exists.

    Returns:
        True if the database was created, False if it already existed.

    Raises:
        psycopg.Error: If connecting or creating fails.

    Example:
        >>> create_database(host="localhost", user="postgres", password="postgres", database="belajar_orm")
        True
    """
    with _connect_admin(host, port, user, password) as conn:
        if _database_exists(conn, database):
            logger.info(f"Database '{database}' already exists")
            return False

        conn.execute(
            sql.SQL("CREATE DATABASE {} ENCODING {} TEMPLATE {}").format(
                sql.Identifier(database),
                sql.Literal(encoding),
                sql.Identifier(template),
            )
        )
        logger.info(f"Database '{database}' created")
        return True


def drop_database(
    host: str,
    user: str,
    password: str,
    database: str,
    port: int = 5432,
) -> bool:
    """Drop ``database`` if it exists.

    PostgreSQL refuses while other sessions are connected; end them with
    ``DBConnection.terminate_connections`` first.

    Returns:
        True if the database was dropped, False if it did not exist.
    """
    with _connect_admin(host, port, user, password) as conn:
        if not _database_exists(conn, database):
            logger.info(f"Database '{database}' does not exist")
            return False

        conn.execute(sql.SQL("DROP DATABASE {}").format(sql.Identifier(database)))
        logger.info(f"Database '{database}' dropped")
        return True
