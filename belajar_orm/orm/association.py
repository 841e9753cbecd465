"""Association helper for working with one relationship of a loaded entity.

Wraps a single relationship (for example ``Product.liked_by_users``) and offers
find, append, delete, replace, clear and count on it. Reads go through SQL with
``with_parent`` so extra criteria can be applied; writes go through the
relationship collection so SQLAlchemy maintains the join table rows.
"""

import logging
from typing import Any

from sqlalchemy import ColumnElement, func, inspect, select
from sqlalchemy.orm import Session, with_parent

logger = logging.getLogger("belajar-orm")


class Association:
    """One relationship of one owner entity.

    Example:
        >>> likes = Association(session, product, "liked_by_users")
        >>> likes.append(user)
        >>> likes.find(User.first_name.like("User%"))
    """

    def __init__(self, session: Session, owner: Any, name: str):
        mapper = inspect(type(owner))
        if name not in mapper.relationships:
            raise ValueError(f"{mapper.class_.__name__} has no relationship named '{name}'")  # noqa: TRY003
        self.session = session
        self.owner = owner
        self.name = name
        self.relationship = mapper.relationships[name]
        self.target_cls = self.relationship.mapper.class_

    @property
    def _attribute(self):
        return getattr(type(self.owner), self.name)

    def _collection(self) -> list[Any]:
        if not self.relationship.uselist:
            raise TypeError(f"Relationship '{self.name}' is not a collection")  # noqa: TRY003
        return getattr(self.owner, self.name)

    def find(self, *criteria: ColumnElement[bool]) -> list[Any]:
        """Related entities matching every criterion."""
        stmt = select(self.target_cls).where(with_parent(self.owner, self._attribute), *criteria)
        return list(self.session.execute(stmt).scalars().all())

    def count(self, *criteria: ColumnElement[bool]) -> int:
        stmt = (
            select(func.count())
            .select_from(self.target_cls)
            .where(with_parent(self.owner, self._attribute), *criteria)
        )
        return self.session.execute(stmt).scalar_one()

    def append(self, *items: Any) -> None:
        """Link the given entities, skipping those already linked."""
        if not self.relationship.uselist:
            setattr(self.owner, self.name, items[-1])
        else:
            collection = self._collection()
            for item in items:
                if item not in collection:
                    collection.append(item)
        self.session.flush()
        logger.debug(f"Appended {len(items)} item(s) to {type(self.owner).__name__}.{self.name}")

    def delete(self, *items: Any) -> None:
        """Unlink the given entities. The entities themselves are kept."""
        if not self.relationship.uselist:
            if getattr(self.owner, self.name) in items:
                setattr(self.owner, self.name, None)
        else:
            collection = self._collection()
            for item in items:
                if item in collection:
                    collection.remove(item)
        self.session.flush()

    def replace(self, *items: Any) -> None:
        """Make the given entities the only linked ones."""
        if not self.relationship.uselist:
            setattr(self.owner, self.name, items[0] if items else None)
        else:
            setattr(self.owner, self.name, list(items))
        self.session.flush()

    def clear(self) -> None:
        """Unlink every related entity."""
        self.replace()
