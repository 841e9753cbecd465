"""Product repository for belajar-orm.

Products and users meet through the ``user_like_product`` join table.
"""

from sqlalchemy import insert, select
from sqlalchemy.orm import Session, selectinload

from belajar_orm.orm.association import Association
from belajar_orm.orm.repository.base import GenericRepository
from belajar_orm.orm.schema import Product, user_like_product


class ProductRepository(GenericRepository[Product]):
    """Repository for Product entity and its many-to-many likes."""

    def __init__(self, session: Session, model_cls: type | None = None):
        super().__init__(session, model_cls or Product)

    def get_with_liked_by_users(self, product_id: int) -> Product | None:
        stmt = (
            select(self.model_cls)
            .where(self.model_cls.id == product_id)
            .options(selectinload(self.model_cls.liked_by_users))
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def add_like(self, user_id: str, product_id: int) -> int:
        """Write a row straight into the join table.

        Returns:
            Number of rows inserted.
        """
        stmt = insert(user_like_product).values(user_id=user_id, product_id=product_id)
        return self.session.execute(stmt).rowcount

    def likes(self, product: Product) -> Association:
        """Association handle over the users liking ``product``."""
        return Association(self.session, product, "liked_by_users")
