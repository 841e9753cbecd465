"""Base Unit of Work for belajar-orm.

Provides the abstract base class with the common UoW patterns, a minimal
repository-less unit of work and the ``transaction`` helper that runs a
callable inside a single commit-or-rollback block.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from sqlalchemy.orm import Session, SessionTransaction
from typing_extensions import Self

from belajar_orm.exceptions import SessionNotSetError

logger = logging.getLogger("belajar-orm")

R = TypeVar("R")


class BaseUnitOfWork(ABC):
    """Abstract base class for Unit of Work pattern.

    Provides common functionality for managing database transactions:
    - Session lifecycle management (context manager)
    - Transaction operations (commit, rollback, flush, savepoint)
    - Lazy repository initialization helper

    Subclasses must implement:
    - `_reset_repositories()`: Drop cached repositories on exit
    - Repository properties using `_get_repository()` helper
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize Unit of Work with a session factory.

        Args:
            session_factory: SQLAlchemy sessionmaker instance.
        """
        self.session_factory = session_factory
        self.session: Session | None = None

    def __enter__(self) -> Self:
        """Enter the context manager and create a new session.

        Returns:
            Self for method chaining.
        """
        self.session = self.session_factory()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit the context manager and clean up session.

        Automatically rolls back if an exception occurred. Work that was
        never committed is discarded when the session closes.
        """
        if exc_type is not None:
            logger.warning(f"Rolling back {type(self).__name__} after {exc_type.__name__}: {exc_val}")
            self.rollback()
        if self.session:
            self.session.close()
            self.session = None
        self._reset_repositories()

    @abstractmethod
    def _reset_repositories(self) -> None:
        """Reset all repository references to None.

        Called during cleanup to ensure repositories are recreated on next access.
        """
        ...

    @classmethod
    def available_repositories(cls) -> list[str]:
        """Names of the repository properties this unit of work exposes, sorted."""
        return sorted(
            name
            for name in dir(cls)
            if isinstance(getattr(cls, name, None), property) and not name.startswith("_")
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(repositories={self.available_repositories()})"

    def _get_repository(self, repo_attr: str, repo_class: type, model_cls: type | None = None) -> Any:
        """Helper method for lazy repository initialization.

        Args:
            repo_attr: Name of the private repository attribute (e.g., "_user_repo").
            repo_class: Repository class to instantiate.
            model_cls: Model class handed to the repository, if it needs one.

        Returns:
            Repository instance.

        Raises:
            SessionNotSetError: If session is not initialized.
        """
        if self.session is None:
            raise SessionNotSetError

        cached_repo = getattr(self, repo_attr, None)
        if cached_repo is not None:
            return cached_repo

        repo = repo_class(self.session, model_cls)
        setattr(self, repo_attr, repo)
        return repo

    def commit(self) -> None:
        """Commit the current transaction."""
        if self.session:
            self.session.commit()

    def rollback(self) -> None:
        """Rollback the current transaction."""
        if self.session:
            self.session.rollback()

    def flush(self) -> None:
        """Flush pending changes without committing."""
        if self.session:
            self.session.flush()

    @contextmanager
    def savepoint(self) -> Iterator[SessionTransaction]:
        """Nested transaction: an error inside rolls back to the savepoint only.

        Example:
            >>> with uow.savepoint():
            ...     uow.users.add(User(id="12"))  # duplicate, rolled back alone
        """
        if self.session is None:
            raise SessionNotSetError
        with self.session.begin_nested() as nested:
            yield nested


class SimpleUnitOfWork(BaseUnitOfWork):
    """Unit of work without repositories, for callers that build their own."""

    def _reset_repositories(self) -> None:
        return None


def transaction(session_factory: Callable[[], Session], fn: Callable[[Session], R]) -> R:
    """Run ``fn`` inside one transaction.

    Commits when ``fn`` returns, rolls back and re-raises when it raises.

    Example:
        >>> transaction(SessionFactory, lambda tx: tx.add(User(id="11")))
    """
    with SimpleUnitOfWork(session_factory) as uow:
        if uow.session is None:
            raise SessionNotSetError
        result = fn(uow.session)
        uow.commit()
        return result
