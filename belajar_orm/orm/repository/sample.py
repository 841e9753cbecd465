"""Sample repository for belajar-orm.

Everything here goes through hand written SQL with bound parameters:
executing statements, scanning one or many rows into plain objects and
iterating a result row by row.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.orm import Session


@dataclass
class SampleRow:
    id: str
    name: str


class SampleRepository:
    """Raw SQL access to the ``sample`` table."""

    def __init__(self, session: Session, model_cls: type | None = None):
        # model_cls is accepted for UoW compatibility; raw SQL never needs it.
        self.session = session
        self.model_cls = model_cls

    def insert(self, sample_id: str, name: str) -> int:
        result = self.session.execute(
            text("INSERT INTO sample (id, name) VALUES (:id, :name)"),
            {"id": sample_id, "name": name},
        )
        return result.rowcount

    def get(self, sample_id: str) -> SampleRow | None:
        row = (
            self.session.execute(text("SELECT id, name FROM sample WHERE id = :id"), {"id": sample_id})
            .mappings()
            .first()
        )
        return SampleRow(**row) if row is not None else None

    def get_all(self) -> list[SampleRow]:
        rows = self.session.execute(text("SELECT id, name FROM sample ORDER BY id")).mappings()
        return [SampleRow(**row) for row in rows]

    def iter_rows(self) -> Iterator[SampleRow]:
        """Yield rows one at a time while the cursor is consumed."""
        result = self.session.execute(text("SELECT id, name FROM sample ORDER BY id"))
        for sample_id, name in result:
            yield SampleRow(id=sample_id, name=name)
