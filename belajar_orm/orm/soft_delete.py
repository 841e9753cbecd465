"""Soft delete support for belajar-orm models.

Two flavours are supported:

- ``SoftDeleteMixin``: ``deleted_at`` is a nullable timestamp, NULL means the row is live.
- ``SoftDeleteFlagMixin``: ``deleted_at`` holds unix nanoseconds, 0 means the row is live.

Every ORM SELECT issued through a Session gets the matching "is live" criteria
attached to each soft-deletable entity, including joins and relationship loads.
Pass ``execution_options(include_deleted=True)`` to query unscoped.
"""

import time
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import BigInteger, ColumnElement, DateTime, event
from sqlalchemy.orm import Mapped, ORMExecuteState, Session, mapped_column, with_loader_criteria

INCLUDE_DELETED = "include_deleted"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SoftDeleteMixin:
    """Timestamp based soft delete."""

    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    @classmethod
    def live_criteria(cls) -> ColumnElement[bool]:
        return cls.deleted_at.is_(None)

    @classmethod
    def live_values(cls) -> dict[str, Any]:
        return {"deleted_at": None}

    @classmethod
    def deleted_values(cls) -> dict[str, Any]:
        return {"deleted_at": utcnow()}

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def mark_deleted(self) -> None:
        self.deleted_at = utcnow()


class SoftDeleteFlagMixin:
    """Unix nanosecond flag based soft delete."""

    deleted_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, index=True)

    @classmethod
    def live_criteria(cls) -> ColumnElement[bool]:
        return cls.deleted_at == 0

    @classmethod
    def live_values(cls) -> dict[str, Any]:
        return {"deleted_at": 0}

    @classmethod
    def deleted_values(cls) -> dict[str, Any]:
        return {"deleted_at": time.time_ns()}

    @property
    def is_deleted(self) -> bool:
        return bool(self.deleted_at)

    def mark_deleted(self) -> None:
        self.deleted_at = time.time_ns()


def is_soft_deletable(model_cls: type) -> bool:
    return issubclass(model_cls, (SoftDeleteMixin, SoftDeleteFlagMixin))


def live_criteria(model_cls: type) -> list[ColumnElement[bool]]:
    """Return the criteria selecting live rows of ``model_cls``, empty for hard-delete models."""
    if is_soft_deletable(model_cls):
        return [model_cls.live_criteria()]
    return []


@event.listens_for(Session, "do_orm_execute")
def _filter_soft_deleted(execute_state: ORMExecuteState) -> None:
    if (
        not execute_state.is_select
        or execute_state.is_column_load
        or execute_state.execution_options.get(INCLUDE_DELETED, False)
    ):
        return

    execute_state.statement = execute_state.statement.options(
        with_loader_criteria(
            SoftDeleteMixin,
            lambda cls: cls.deleted_at.is_(None),
            include_aliases=True,
        ),
        with_loader_criteria(
            SoftDeleteFlagMixin,
            lambda cls: cls.deleted_at == 0,
            include_aliases=True,
        ),
    )
