"""Address repository for belajar-orm."""

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from belajar_orm.orm.repository.base import GenericRepository
from belajar_orm.orm.schema import Address


class AddressRepository(GenericRepository[Address]):
    """Repository for Address entity."""

    def __init__(self, session: Session, model_cls: type | None = None):
        super().__init__(session, model_cls or Address)

    def get_by_user_id(self, user_id: str) -> list[Address]:
        return self.find(self.model_cls.user_id == user_id)

    def get_all_with_user(self) -> list[Address]:
        """Every address with the owning user loaded (belongs-to)."""
        stmt = select(self.model_cls).options(selectinload(self.model_cls.user)).order_by(self.model_cls.id)
        return list(self.session.execute(stmt).scalars().all())
