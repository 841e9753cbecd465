"""Repositories for the two todo flavours.

``Todo`` soft deletes with a nanosecond flag, ``TodoRecord`` with a nullable timestamp.
"""

from sqlalchemy.orm import Session

from belajar_orm.orm.repository.base import GenericRepository
from belajar_orm.orm.schema import Todo, TodoRecord


class TodoRepository(GenericRepository[Todo]):
    def __init__(self, session: Session, model_cls: type | None = None):
        super().__init__(session, model_cls or Todo)

    def get_by_user_id(self, user_id: str) -> list[Todo]:
        return self.find(self.model_cls.user_id == user_id)


class TodoRecordRepository(GenericRepository[TodoRecord]):
    def __init__(self, session: Session, model_cls: type | None = None):
        super().__init__(session, model_cls or TodoRecord)
