import os
from collections.abc import Generator
from typing import Any

import pytest
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from belajar_orm.orm.schema import Address, Base, Name, Product, User, Wallet

PRODUCT_ID = 8174854164025333465


def _postgres_url() -> str | None:
    host = os.getenv("POSTGRES_HOST")
    user = os.getenv("POSTGRES_USER")
    pwd = os.getenv("POSTGRES_PASSWORD")
    port = os.getenv("POSTGRES_PORT")
    db_name = os.getenv("TEST_DB_NAME")
    if not all([host, user, pwd, port, db_name]):
        return None
    return f"postgresql+psycopg://{user}:{pwd}@{host}:{int(port)}/{db_name}"


def _sqlite_engine() -> Engine:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # pysqlite's own transaction handling breaks SAVEPOINT; SQLAlchemy emits BEGIN instead.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


@pytest.fixture(scope="session")
def db_engine():
    """Create a database engine for the test session.

    Uses PostgreSQL when POSTGRES_HOST, POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_PORT and TEST_DB_NAME
    are set, an in-memory SQLite database otherwise.
    """
    postgres_url = _postgres_url()
    if postgres_url is None:
        engine = _sqlite_engine()
    else:
        engine = create_engine(
            postgres_url,
            pool_pre_ping=True,  # Check connection health
            pool_size=10,
            max_overflow=20,
        )

    yield engine

    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Create a thread-safe scoped session factory over freshly created tables.

    Tables are dropped after the test, so commits made by the test never leak into the next one.
    """
    Base.metadata.create_all(db_engine)
    factory = scoped_session(sessionmaker(bind=db_engine))

    yield factory

    factory.remove()  # Clean up the scoped session
    Base.metadata.drop_all(db_engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, Any, None]:
    """Create a new database session for each test.

    Uncommitted work is rolled back after the test.
    """
    session = session_factory()

    yield session

    session.rollback()


@pytest.fixture
def seed_users(db_session: Session) -> list[User]:
    """Users "1" to "10", all with password "rahasia"."""
    users = [User(id="1", password="rahasia", name=Name(first_name="Yonathan", last_name="Setiadi"))]
    users.extend(User(id=str(i), password="rahasia", name=Name(first_name=f"User {i}")) for i in range(2, 11))
    db_session.add_all(users)
    db_session.commit()
    return users


@pytest.fixture
def seed_wallets(db_session: Session, seed_users: list[User]) -> list[Wallet]:
    """Wallets for users "1" (1,000,000), "2" (500,000) and "3" (0)."""
    wallets = [
        Wallet(user_id="1", balance=1_000_000),
        Wallet(user_id="2", balance=500_000),
        Wallet(user_id="3", balance=0),
    ]
    db_session.add_all(wallets)
    db_session.commit()
    return wallets


@pytest.fixture
def seed_addresses(db_session: Session, seed_users: list[User]) -> list[Address]:
    """Two addresses for user "1", one for user "2"."""
    addresses = [
        Address(user_id="1", address="Jalan jalan kemana pun"),
        Address(user_id="1", address="Coba tulis"),
        Address(user_id="2", address="Jalan Sudirman"),
    ]
    db_session.add_all(addresses)
    db_session.commit()
    return addresses


@pytest.fixture
def seed_product(db_session: Session, seed_users: list[User]) -> Product:
    """One product liked by users "1" and "2"."""
    product = Product(id=PRODUCT_ID, name="Contoh Product", price=1_000_000)
    product.liked_by_users = [db_session.get(User, "1"), db_session.get(User, "2")]
    db_session.add(product)
    db_session.commit()
    return product
