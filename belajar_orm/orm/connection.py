import logging
import os
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import Engine, inspect, text

from belajar_orm.exceptions import EnvNotFoundError, MissingDBNameError

logger = logging.getLogger("belajar-orm")

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class DBConnection:
    """Database connection configuration."""

    host: str
    port: int
    username: str
    password: str
    database: str | None = None
    echo: bool = False

    @property
    def db_url(self) -> str:
        """Construct the SQLAlchemy database URL."""
        if self.database is None:
            return f"postgresql+psycopg://{self.username}:{self.password}@{self.host}:{self.port}"
        return f"postgresql+psycopg://{self.username}:{self.password}@{self.host}:{self.port}/{self.database}"

    def get_engine(self) -> Engine:
        """Create a SQLAlchemy engine using the connection configuration.

        With ``echo`` enabled every emitted statement is logged, the same way
        an ORM running in info log mode prints its SQL.
        """
        from sqlalchemy import create_engine

        return create_engine(self.db_url, echo=self.echo, pool_pre_ping=True)

    def get_session_factory(self):
        """Create a SQLAlchemy session factory using the connection configuration."""
        from sqlalchemy.orm import sessionmaker

        engine = self.get_engine()
        return sessionmaker(bind=engine)

    def get_scoped_session_factory(self):
        """Create a thread-safe scoped SQLAlchemy session factory."""
        from sqlalchemy.orm import scoped_session

        return scoped_session(self.get_session_factory())

    def get_table_names(self) -> list[str]:
        engine = self.get_engine()
        try:
            return sorted(inspect(engine).get_table_names())
        finally:
            engine.dispose()

    def create_schema(self) -> None:
        """Create every mapped table that does not exist yet."""
        from belajar_orm.orm.schema import Base

        engine = self.get_engine()
        try:
            Base.metadata.create_all(engine)
        finally:
            engine.dispose()
        logger.info(f"Created {len(Base.metadata.tables)} tables in database '{self.database}'.")

    def drop_schema(self) -> None:
        """Drop every mapped table."""
        from belajar_orm.orm.schema import Base

        engine = self.get_engine()
        try:
            Base.metadata.drop_all(engine)
        finally:
            engine.dispose()
        logger.info(f"Dropped all tables in database '{self.database}'.")

    def create_database(self) -> bool:
        if self.database is None:
            raise MissingDBNameError

        from belajar_orm.orm.util import create_database

        return create_database(
            host=self.host,
            port=self.port,
            user=self.username,
            password=self.password,
            database=self.database,
        )

    def terminate_connections(self):
        """Terminate all connections to this database except the current one.

        This is useful before dropping a database to ensure no active connections
        prevent the DROP DATABASE command from executing.
        """
        if self.database is None:
            raise MissingDBNameError

        # Connect to 'postgres' database to terminate connections
        admin_conn = DBConnection(
            host=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            database="postgres",
        )
        engine = admin_conn.get_engine()
        try:
            with engine.connect() as conn:
                conn.execute(
                    text(
                        """
                        SELECT pg_terminate_backend(pid)
                        FROM pg_stat_activity
                        WHERE datname = :dbname AND pid <> pg_backend_pid()
                        """
                    ),
                    {"dbname": self.database},
                )
                conn.commit()
            logger.info(f"Terminated all connections to database '{self.database}'.")
        finally:
            engine.dispose()

    def drop_database(self) -> bool:
        if self.database is None:
            raise MissingDBNameError

        from belajar_orm.orm.util import drop_database

        return drop_database(
            host=self.host,
            port=self.port,
            user=self.username,
            password=self.password,
            database=self.database,
        )

    @classmethod
    def from_config(cls, config_path: Path | None = None) -> "DBConnection":
        """Load database connection configuration from a YAML file.

        Args:
            config_path: Directory holding ``db.yaml``. If None, uses the CLI config path.
        Returns:
            DBConnection instance with loaded configuration.
        """
        from omegaconf import DictConfig, OmegaConf

        from belajar_orm import cli

        resolved_path = config_path or cli.CONFIG_PATH
        if resolved_path is None:
            raise ValueError("Config path not provided and CONFIG_PATH is not set.")  # noqa: TRY003

        cfg = OmegaConf.load(Path(resolved_path) / "db.yaml")
        if not isinstance(cfg, DictConfig):
            raise TypeError("db.yaml must be a YAML mapping.")  # noqa: TRY003

        password = os.environ.get("POSTGRES_PASSWORD", cfg.get("password"))
        if password is None:
            raise ValueError("Database password not found in config or POSTGRES_PASSWORD env variable.")  # noqa: TRY003

        return cls(
            host=cfg.host,
            port=int(cfg.port),
            username=cfg.user,
            password=str(password),
            database=cfg.get("database"),
            echo=bool(cfg.get("echo", False)),
        )

    @classmethod
    def from_env(cls) -> "DBConnection":
        """Load database connection configuration from environment variables.

        Returns:
            DBConnection instance with loaded configuration.
        """
        host = os.getenv("POSTGRES_HOST", "localhost")
        port = int(os.getenv("POSTGRES_PORT", "5432"))
        username = os.getenv("POSTGRES_USER")
        password = os.getenv("POSTGRES_PASSWORD")
        database = os.getenv("POSTGRES_DB", None)
        echo = os.getenv("BELAJAR_ORM_ECHO", "false").lower() in _TRUTHY

        if username is None:
            raise EnvNotFoundError("POSTGRES_USER")
        if password is None:
            raise EnvNotFoundError("POSTGRES_PASSWORD")

        return cls(
            host=host,
            port=port,
            username=username,
            password=password,
            database=database,
            echo=echo,
        )
