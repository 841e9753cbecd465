"""GuestBook repository for belajar-orm."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from belajar_orm.orm.repository.base import GenericRepository
from belajar_orm.orm.schema import GuestBook


class GuestBookRepository(GenericRepository[GuestBook]):
    def __init__(self, session: Session, model_cls: type | None = None):
        super().__init__(session, model_cls or GuestBook)

    def get_latest(self, limit: int = 10) -> list[GuestBook]:
        stmt = select(self.model_cls).order_by(self.model_cls.created_at.desc(), self.model_cls.id.desc()).limit(limit)
        return list(self.session.execute(stmt).scalars().all())
