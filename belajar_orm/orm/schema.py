"""ORM schema definitions for belajar-orm.

Every table exercised by the demos is declared here on a single declarative ``Base``:

- ``users`` with an embedded ``Name`` (three columns mapped as one composite value),
  a one-to-one ``wallet``, one-to-many ``addresses`` and many-to-many ``like_products``.
- ``wallets``, ``addresses``, ``todo_records`` and ``guest_books`` carry the standard
  model fields (auto-increment id, timestamps and a timestamp soft delete).
- ``todos`` keeps unix-nanosecond timestamps and a nanosecond soft delete flag.
- ``user_logs`` keeps unix-millisecond timestamps.
- ``products`` with caller supplied ids, liked by users through ``user_like_product``.
- ``sample`` is only touched through raw SQL.

Example:
    from belajar_orm.orm.schema import Base, Name, User, Wallet

    user = User(id="1", password="rahasia", name=Name("Nathan"), wallet=Wallet(balance=1_000_000))
"""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    event,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, composite, mapped_column, relationship

from belajar_orm.orm.soft_delete import SoftDeleteFlagMixin, SoftDeleteMixin, utcnow


class Base(DeclarativeBase):
    pass


def unix_millis() -> int:
    return time.time_ns() // 1_000_000


def unix_nanos() -> int:
    return time.time_ns()


def generate_user_id() -> str:
    return f"user-{unix_millis()}"


@dataclass
class Name:
    """Embedded name value stored as first_name, middle_name and last_name columns."""

    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class ModelMixin(SoftDeleteMixin, TimestampMixin):
    """Standard model fields: auto-increment id, timestamps and a timestamp soft delete."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


user_like_product = Table(
    "user_like_product",
    Base.metadata,
    Column("user_id", String(100), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", BigInteger, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    """Application user."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    password: Mapped[str] = mapped_column(String(255), default="")
    first_name: Mapped[str] = mapped_column(String(100), default="")
    middle_name: Mapped[str] = mapped_column(String(100), default="")
    last_name: Mapped[str] = mapped_column(String(100), default="")
    # Written on insert only; nothing in the repository layer updates it.
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    name: Mapped[Name] = composite("first_name", "middle_name", "last_name")

    # Relationships
    wallet: Mapped[Optional["Wallet"]] = relationship(back_populates="user", passive_deletes=True)
    addresses: Mapped[list["Address"]] = relationship(back_populates="user", passive_deletes=True)
    like_products: Mapped[list["Product"]] = relationship(
        secondary=user_like_product, back_populates="liked_by_users"
    )

    # Transient, never persisted.
    information = ""

    def __init__(self, information: str = "", **kwargs):
        super().__init__(**kwargs)
        self.information = information

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, name={self.name!r})>"


@event.listens_for(User, "before_insert")
def _assign_user_id(mapper, connection, target: User) -> None:
    if not target.id:
        target.id = generate_user_id()


class UserLog(Base):
    """Audit log entry with unix millisecond timestamps."""

    __tablename__ = "user_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(100))
    action: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[int] = mapped_column(BigInteger, default=unix_millis)
    updated_at: Mapped[int] = mapped_column(BigInteger, default=unix_millis, onupdate=unix_millis)


class Wallet(ModelMixin, Base):
    """Balance holder, one per user."""

    __tablename__ = "wallets"

    user_id: Mapped[str | None] = mapped_column(String(100), ForeignKey("users.id", ondelete="CASCADE"), unique=True)
    balance: Mapped[int] = mapped_column(BigInteger, default=0)

    user: Mapped[Optional["User"]] = relationship(back_populates="wallet")

    def __repr__(self) -> str:
        return f"<Wallet(id={self.id!r}, user_id={self.user_id!r}, balance={self.balance!r})>"


class Address(ModelMixin, Base):
    """Postal address, many per user."""

    __tablename__ = "addresses"

    user_id: Mapped[str | None] = mapped_column(String(100), ForeignKey("users.id", ondelete="CASCADE"))
    address: Mapped[str] = mapped_column(Text)

    user: Mapped[Optional["User"]] = relationship(back_populates="addresses")


class Todo(SoftDeleteFlagMixin, Base):
    """Task with unix nanosecond timestamps and a nanosecond soft delete flag."""

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(100))
    task: Mapped[str] = mapped_column(Text)
    created_at: Mapped[int] = mapped_column(BigInteger, default=unix_nanos)
    updated_at: Mapped[int] = mapped_column(BigInteger, default=unix_nanos, onupdate=unix_nanos)


class TodoRecord(ModelMixin, Base):
    """Task using the standard model fields."""

    __tablename__ = "todo_records"

    user_id: Mapped[str] = mapped_column(String(100))
    task: Mapped[str] = mapped_column(Text)


class GuestBook(ModelMixin, Base):
    __tablename__ = "guest_books"

    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    message: Mapped[str] = mapped_column(Text)


class Product(TimestampMixin, Base):
    """Product with a caller supplied id."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(255))
    price: Mapped[int] = mapped_column(BigInteger, default=0)

    liked_by_users: Mapped[list["User"]] = relationship(
        secondary=user_like_product, back_populates="like_products"
    )


class Sample(Base):
    """Plain table used by the raw SQL demos."""

    __tablename__ = "sample"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(255))


__all__ = [
    "Address",
    "Base",
    "GuestBook",
    "ModelMixin",
    "Name",
    "Product",
    "Sample",
    "TimestampMixin",
    "Todo",
    "TodoRecord",
    "User",
    "UserLog",
    "Wallet",
    "generate_user_id",
    "unix_millis",
    "unix_nanos",
    "user_like_product",
]
