"""Repository layer for belajar-orm.

Implements Generic Repository + Unit of Work patterns for CRUD operations
and transaction management with SQLAlchemy. Soft-deletable models are
stamped instead of removed unless ``hard_delete`` is used.
"""

from collections.abc import Callable
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, delete, func, insert, inspect, select, update
from sqlalchemy.orm import Session

from belajar_orm.exceptions import NoSessionError, RecordNotFoundError
from belajar_orm.orm.scopes import Scope, apply_scopes
from belajar_orm.orm.soft_delete import INCLUDE_DELETED, is_soft_deletable, live_criteria

T = TypeVar("T")


class GenericRepository(Generic[T]):
    """Generic repository implementing common CRUD operations.

    This base class provides reusable database operations that can be
    extended by specific repositories for custom business logic.
    """

    def __init__(self, session: Session, model_cls: type[T]):
        """Initialize repository with a session and model class.

        Args:
            session: SQLAlchemy session for database operations.
            model_cls: The SQLAlchemy model class this repository manages.
        """
        self.session = session
        self.model_cls = model_cls

    @property
    def _primary_key(self):
        return inspect(self.model_cls).primary_key[0]

    def _select(self, *criteria: ColumnElement[bool], unscoped: bool = False) -> Select:
        stmt = select(self.model_cls).where(*criteria)
        if unscoped:
            stmt = stmt.execution_options(**{INCLUDE_DELETED: True})
        return stmt

    def add(self, entity: T) -> T:
        """Add a new entity to the session.

        Args:
            entity: The entity instance to add.

        Returns:
            The added entity.
        """
        self.session.add(entity)
        return entity

    def add_all(self, entities: list[T]) -> list[T]:
        """Add multiple entities to the session.

        Args:
            entities: List of entity instances to add.

        Returns:
            The added entities.
        """
        self.session.add_all(entities)
        return entities

    def create(self, entity: T) -> T:
        """Add an entity and flush so database generated values (ids, defaults) are populated."""
        self.session.add(entity)
        self.session.flush()
        return entity

    def create_all(self, entities: list[T]) -> int:
        """Insert a batch of entities in a single flush.

        Returns:
            Number of rows inserted.
        """
        self.session.add_all(entities)
        self.session.flush()
        return len(entities)

    def get_by_id(self, _id: Any) -> T | None:
        """Retrieve an entity by its primary key.

        Soft-deleted rows are treated as missing, even when still present in the identity map.

        Args:
            _id: The primary key value.

        Returns:
            The entity if found, None otherwise.
        """
        entity = self.session.get(self.model_cls, _id)
        if entity is not None and is_soft_deletable(self.model_cls) and entity.is_deleted:
            return None
        return entity

    def get_by_id_unscoped(self, _id: Any) -> T | None:
        """Retrieve an entity by primary key, soft-deleted or not."""
        return self.session.get(self.model_cls, _id, execution_options={INCLUDE_DELETED: True})

    def get_or_raise(self, _id: Any) -> T:
        entity = self.get_by_id(_id)
        if entity is None:
            raise RecordNotFoundError(self.model_cls.__name__, _id)
        return entity

    def get_all(self, limit: int | None = None, offset: int | None = None) -> list[T]:
        """Retrieve all entities of this type.

        Args:
            limit: Maximum number of results to return.
            offset: Number of results to skip.

        Returns:
            List of all entities.
        """
        stmt = select(self.model_cls)
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars().all())

    def first(self, *criteria: ColumnElement[bool]) -> T | None:
        """First matching row ordered by primary key ascending."""
        stmt = self._select(*criteria).order_by(self._primary_key.asc()).limit(1)
        return self.session.execute(stmt).scalars().first()

    def last(self, *criteria: ColumnElement[bool]) -> T | None:
        """Last matching row ordered by primary key descending."""
        stmt = self._select(*criteria).order_by(self._primary_key.desc()).limit(1)
        return self.session.execute(stmt).scalars().first()

    def take(self, *criteria: ColumnElement[bool]) -> T | None:
        """Any one matching row, without ordering."""
        stmt = self._select(*criteria).limit(1)
        return self.session.execute(stmt).scalars().first()

    def find(self, *criteria: ColumnElement[bool], scopes: tuple[Scope, ...] = ()) -> list[T]:
        """Retrieve entities matching every criterion after applying the given scopes.

        Example:
            >>> repo.find(Wallet.user_id == "1", scopes=(sultan_wallet,))
        """
        stmt = apply_scopes(self._select(*criteria), *scopes)
        return list(self.session.execute(stmt).scalars().all())

    def find_unscoped(self, *criteria: ColumnElement[bool]) -> list[T]:
        """Like ``find`` but soft-deleted rows are included."""
        stmt = self._select(*criteria, unscoped=True)
        return list(self.session.execute(stmt).scalars().all())

    def find_by(self, **conditions: Any) -> list[T]:
        """Retrieve entities whose columns equal the given keyword values.

        Only the given columns take part in the condition.
        """
        stmt = select(self.model_cls).filter_by(**conditions)
        return list(self.session.execute(stmt).scalars().all())

    def save(self, entity: T) -> T:
        """Insert the entity, or update every column of the row sharing its primary key.

        A soft-deleted row sharing the primary key is updated and revived, not inserted again.

        Returns:
            The persistent instance attached to this session.
        """
        state = inspect(entity)
        if is_soft_deletable(self.model_cls) and not state.persistent:
            _id = getattr(entity, self._primary_key.key)
            if _id is not None:
                # Puts a soft-deleted row into the identity map so merge updates it.
                self.get_by_id_unscoped(_id)
            for key, value in self.model_cls.live_values().items():
                if key not in state.dict:
                    setattr(entity, key, value)

        merged = self.session.merge(entity)
        self.session.flush()
        return merged

    def update_columns(self, values: dict[str, Any], *criteria: ColumnElement[bool]) -> int:
        """Update the given columns on every live row matching the criteria.

        Returns:
            Number of rows affected.
        """
        stmt = (
            update(self.model_cls)
            .where(*criteria, *live_criteria(self.model_cls))
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        return self.session.execute(stmt).rowcount

    def delete(self, entity: T) -> None:
        """Delete an entity, stamping ``deleted_at`` for soft-deletable models.

        Args:
            entity: The entity instance to delete.
        """
        if is_soft_deletable(self.model_cls):
            entity.mark_deleted()
            self.session.flush()
        else:
            self.session.delete(entity)
            self.session.flush()

    def hard_delete(self, entity: T) -> None:
        """Remove the row physically regardless of soft delete support."""
        self.session.delete(entity)
        self.session.flush()

    def delete_by_id(self, _id: Any) -> bool:
        """Delete an entity by its primary key.

        Args:
            _id: The primary key value.

        Returns:
            True if entity was deleted, False if not found.
        """
        entity = self.get_by_id(_id)
        if entity:
            self.delete(entity)
            return True
        return False

    def delete_where(self, *criteria: ColumnElement[bool]) -> int:
        """Delete every live row matching the criteria.

        Returns:
            Number of rows affected.
        """
        if is_soft_deletable(self.model_cls):
            stmt = (
                update(self.model_cls)
                .where(*criteria, *live_criteria(self.model_cls))
                .values(**self.model_cls.deleted_values())
            )
        else:
            stmt = delete(self.model_cls).where(*criteria)
        return self.session.execute(stmt.execution_options(synchronize_session="fetch")).rowcount

    def count(self, *criteria: ColumnElement[bool]) -> int:
        """Count live entities matching the criteria.

        Returns:
            Total count of entities.
        """
        stmt = (
            select(func.count())
            .select_from(self.model_cls)
            .where(*criteria, *live_criteria(self.model_cls))
        )
        return self.session.execute(stmt).scalar_one()

    def exists(self, _id: Any) -> bool:
        """Check if an entity exists by its primary key.

        Args:
            _id: The primary key value.

        Returns:
            True if entity exists, False otherwise.
        """
        return self.get_by_id(_id) is not None

    def insert_values(self, values: dict[str, Any]) -> int:
        """Insert one row from a column mapping, bypassing relationships entirely.

        Returns:
            Number of rows inserted.
        """
        result = self.session.execute(insert(self.model_cls.__table__).values(**values))
        return result.rowcount


def column_values(entity: Any) -> dict[str, Any]:
    """Collect the column attribute values set on an entity, skipping relationships."""
    state = inspect(entity)
    return {attr.key: state.dict[attr.key] for attr in state.mapper.column_attrs if attr.key in state.dict}


def create_repository(session: Session, model_cls: type[T]) -> GenericRepository[T]:
    """Factory function to create a repository instance.

    Args:
        session: SQLAlchemy session.
        model_cls: The model class for the repository.

    Returns:
        A new GenericRepository instance.

    Example:
        >>> session = SessionFactory()
        >>> log_repo = create_repository(session, UserLog)
        >>> log = log_repo.get_by_id(1)
    """
    return GenericRepository(session, model_cls)


@contextmanager
def repository_context(session_factory: Callable[[], Session], model_cls: type[T]):
    """Context manager for quick repository operations.

    Combines UnitOfWork and Repository creation for simple use cases
    where you need to perform operations on a single model type.

    Args:
        session_factory: SQLAlchemy sessionmaker.
        model_cls: The model class for the repository.

    Yields:
        A tuple of (repository, unit_of_work) for operations.

    Example:
        >>> with repository_context(SessionFactory, GuestBook) as (repo, uow):
        ...     repo.add(GuestBook(name="Budi", email="budi@example.com", message="Halo"))
        ...     uow.commit()
    """
    from belajar_orm.orm.uow.base import SimpleUnitOfWork

    with SimpleUnitOfWork(session_factory) as uow:
        if uow.session is None:
            raise NoSessionError
        repo = GenericRepository(uow.session, model_cls)
        yield repo, uow
