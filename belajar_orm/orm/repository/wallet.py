"""Wallet repository for belajar-orm.

Besides wallet lookups this is where the aggregation demos live:
sum / min / max / avg of balances and a grouped variant filtered with HAVING.
"""

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from belajar_orm.orm.repository.base import GenericRepository
from belajar_orm.orm.schema import User, Wallet
from belajar_orm.orm.scopes import broke_wallet, sultan_wallet
from belajar_orm.orm.soft_delete import live_criteria


@dataclass
class AggregationResult:
    """Balance statistics over a set of wallets."""

    total_balance: int
    min_balance: int
    max_balance: int
    avg_balance: float


class WalletRepository(GenericRepository[Wallet]):
    """Repository for Wallet entity with owner loading and balance aggregation."""

    def __init__(self, session: Session, model_cls: type | None = None):
        super().__init__(session, model_cls or Wallet)

    def _aggregate_columns(self):
        balance = self.model_cls.balance
        return (
            func.coalesce(func.sum(balance), 0).label("total_balance"),
            func.coalesce(func.min(balance), 0).label("min_balance"),
            func.coalesce(func.max(balance), 0).label("max_balance"),
            func.coalesce(func.avg(balance), 0).label("avg_balance"),
        )

    @staticmethod
    def _to_result(row) -> AggregationResult:
        return AggregationResult(
            total_balance=int(row.total_balance),
            min_balance=int(row.min_balance),
            max_balance=int(row.max_balance),
            avg_balance=float(row.avg_balance),
        )

    def get_by_user_id(self, user_id: str) -> Wallet | None:
        stmt = select(self.model_cls).where(self.model_cls.user_id == user_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_user_id_for_update(self, user_id: str) -> Wallet | None:
        """Read a user's wallet while holding a row lock until the transaction ends."""
        stmt = select(self.model_cls).where(self.model_cls.user_id == user_id).with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def get_with_user(self, wallet_id: int) -> Wallet | None:
        stmt = select(self.model_cls).where(self.model_cls.id == wallet_id).options(selectinload(self.model_cls.user))
        return self.session.execute(stmt).scalar_one_or_none()

    def get_with_user_addresses(self, wallet_id: int) -> Wallet | None:
        """Nested eager load: the wallet's owner and the owner's addresses."""
        stmt = (
            select(self.model_cls)
            .where(self.model_cls.id == wallet_id)
            .options(selectinload(self.model_cls.user).selectinload(User.addresses))
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def aggregate(self) -> AggregationResult:
        """Sum, minimum, maximum and average balance over every live wallet."""
        stmt = select(*self._aggregate_columns()).select_from(self.model_cls).where(*live_criteria(self.model_cls))
        return self._to_result(self.session.execute(stmt).one())

    def aggregate_by_user(self, min_total: int) -> list[AggregationResult]:
        """Balance statistics per owner, keeping owners whose total exceeds ``min_total``."""
        stmt = (
            select(*self._aggregate_columns())
            .select_from(self.model_cls)
            .join(self.model_cls.user)
            .where(*live_criteria(self.model_cls))
            .group_by(User.id)
            .having(func.sum(self.model_cls.balance) > min_total)
            .order_by(User.id)
        )
        return [self._to_result(row) for row in self.session.execute(stmt)]

    def get_broke(self) -> list[Wallet]:
        return self.find(scopes=(broke_wallet,))

    def get_sultans(self) -> list[Wallet]:
        return self.find(scopes=(sultan_wallet,))
