"""User repository for belajar-orm.

Covers the query building demos around ``users``: single-row lookups,
AND / OR / NOT conditions, column selection into plain result objects,
ordering with limit and offset, upserts, row locking, eager loading and joins.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, inspect, not_, or_, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, contains_eager, joinedload, selectinload

from belajar_orm.orm.repository.base import GenericRepository, column_values
from belajar_orm.orm.schema import Address, User, Wallet, generate_user_id
from belajar_orm.orm.soft_delete import live_criteria


@dataclass
class UserResponse:
    """Subset of user columns returned without loading full entities."""

    id: str
    first_name: str
    last_name: str


class UserRepository(GenericRepository[User]):
    """Repository for User entity with relationship loading and join queries."""

    def __init__(self, session: Session, model_cls: type | None = None):
        """Initialize user repository.

        Args:
            session: SQLAlchemy session for database operations.
            model_cls: The User model class to use. If None, uses the default schema.
        """
        super().__init__(session, model_cls or User)

    def create_without_associations(self, user: User) -> int:
        """Insert only the user row, leaving wallet, addresses and liked products untouched.

        Returns:
            Number of rows inserted.
        """
        values = column_values(user)
        if not values.get("id"):
            values["id"] = generate_user_id()
        return self.insert_values(values)

    def upsert(self, user: User) -> int:
        """Insert the user or, on primary key conflict, overwrite every column but ``created_at``.

        Returns:
            Number of rows affected.
        """
        values = column_values(user)
        if not values.get("id"):
            values["id"] = generate_user_id()
        table = self.model_cls.__table__

        dialect = self.session.get_bind().dialect.name
        insert_fn = postgresql.insert if dialect == "postgresql" else sqlite.insert
        stmt = insert_fn(table).values(**values)
        update_columns = {
            column.key: stmt.excluded[column.key]
            for column in table.columns
            if not column.primary_key and column.key != "created_at"
        }
        stmt = stmt.on_conflict_do_update(index_elements=[table.c.id], set_=update_columns)
        return self.session.execute(stmt).rowcount

    def get_for_update(self, user_id: str) -> User | None:
        """Read a user while holding a row lock until the transaction ends."""
        stmt = select(self.model_cls).where(self.model_cls.id == user_id).with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def find_by_ids(self, ids: list[str]) -> list[User]:
        return self.find(self.model_cls.id.in_(ids))

    def search(self, first_name_like: str, password: str) -> list[User]:
        """Users whose first name matches the pattern AND whose password matches."""
        return self.find(self.model_cls.first_name.like(first_name_like), self.model_cls.password == password)

    def search_any(self, first_name_like: str, password: str) -> list[User]:
        """Users whose first name matches the pattern OR whose password matches."""
        return self.find(or_(self.model_cls.first_name.like(first_name_like), self.model_cls.password == password))

    def search_excluding(self, first_name_like: str, password: str) -> list[User]:
        """Users whose first name does NOT match the pattern but whose password matches."""
        return self.find(not_(self.model_cls.first_name.like(first_name_like)), self.model_cls.password == password)

    def list_responses(self) -> list[UserResponse]:
        """Select id, first and last name into ``UserResponse`` objects instead of entities."""
        stmt = select(self.model_cls.id, self.model_cls.first_name, self.model_cls.last_name).order_by(
            self.model_cls.id
        )
        return [UserResponse(**row) for row in self.session.execute(stmt).mappings()]

    def list_ordered(self, limit: int, offset: int = 0) -> list[User]:
        """Users ordered by id then first name, one page at a time."""
        stmt = (
            select(self.model_cls)
            .order_by(self.model_cls.id.asc(), self.model_cls.first_name.asc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.execute(stmt).scalars().all())

    def update_name(self, user_id: str, **name_parts: str) -> int:
        """Update any of first_name, middle_name and last_name on one user."""
        return self.update_columns(name_parts, self.model_cls.id == user_id)

    def get_with_wallet(self, user_id: str) -> User | None:
        stmt = select(self.model_cls).where(self.model_cls.id == user_id).options(selectinload(self.model_cls.wallet))
        return self.session.execute(stmt).scalar_one_or_none()

    def get_with_rich_wallet(self, user_id: str, min_balance: int) -> User | None:
        """Load a user and its wallet only if the wallet holds more than ``min_balance``."""
        stmt = (
            select(self.model_cls)
            .where(self.model_cls.id == user_id)
            .options(selectinload(self.model_cls.wallet.and_(Wallet.balance > min_balance)))
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def get_with_all_relations(self, user_id: str) -> User | None:
        """Retrieve a user with every relationship eagerly loaded."""
        stmt = select(self.model_cls).where(self.model_cls.id == user_id).options(
            *(selectinload(getattr(self.model_cls, rel.key)) for rel in inspect(self.model_cls).relationships)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def get_with_like_products(self, user_id: str) -> User | None:
        stmt = (
            select(self.model_cls)
            .where(self.model_cls.id == user_id)
            .options(selectinload(self.model_cls.like_products))
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def get_all_with_wallet(self) -> list[User]:
        """Every user with its wallet pulled in by a LEFT OUTER JOIN."""
        stmt = select(self.model_cls).options(joinedload(self.model_cls.wallet)).order_by(self.model_cls.id)
        return list(self.session.execute(stmt).unique().scalars().all())

    def get_all_with_addresses_and_wallet(self) -> list[User]:
        """Addresses loaded by a follow-up query, wallet by a join."""
        stmt = (
            select(self.model_cls)
            .options(selectinload(self.model_cls.addresses), joinedload(self.model_cls.wallet))
            .order_by(self.model_cls.id)
        )
        return list(self.session.execute(stmt).unique().scalars().all())

    def get_having_wallet(self) -> list[User]:
        """Users owning a wallet, via an INNER JOIN."""
        stmt = select(self.model_cls).join(self.model_cls.wallet).order_by(self.model_cls.id)
        return list(self.session.execute(stmt).scalars().all())

    def get_with_wallet_above(self, min_balance: int) -> list[User]:
        """Users whose wallet holds more than ``min_balance``, the wallet populated from the same join."""
        stmt = (
            select(self.model_cls)
            .join(self.model_cls.wallet)
            .where(Wallet.balance > min_balance)
            .options(contains_eager(self.model_cls.wallet))
            .order_by(self.model_cls.id)
        )
        return list(self.session.execute(stmt).unique().scalars().all())

    def count_with_wallet_above(self, min_balance: int) -> int:
        stmt = (
            select(func.count())
            .select_from(self.model_cls)
            .join(self.model_cls.wallet)
            .where(Wallet.balance > min_balance, *live_criteria(Wallet))
        )
        return self.session.execute(stmt).scalar_one()

    def get_with_address_like(self, pattern: str) -> list[User]:
        stmt = (
            select(self.model_cls)
            .join(self.model_cls.addresses)
            .where(Address.address.like(pattern))
            .distinct()
            .order_by(self.model_cls.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def get_by_conditions(self, conditions: dict[str, Any]) -> list[User]:
        """Map condition: every key is a column name compared for equality."""
        return self.find_by(**conditions)
