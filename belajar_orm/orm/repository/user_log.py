"""UserLog repository for belajar-orm."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from belajar_orm.orm.repository.base import GenericRepository
from belajar_orm.orm.schema import UserLog


class UserLogRepository(GenericRepository[UserLog]):
    def __init__(self, session: Session, model_cls: type | None = None):
        super().__init__(session, model_cls or UserLog)

    def log(self, user_id: str, action: str) -> UserLog:
        """Record an action and return the entry with its generated id."""
        return self.create(self.model_cls(user_id=user_id, action=action))

    def get_by_user_id(self, user_id: str) -> list[UserLog]:
        stmt = select(self.model_cls).where(self.model_cls.user_id == user_id).order_by(self.model_cls.id)
        return list(self.session.execute(stmt).scalars().all())
