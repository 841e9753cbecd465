"""Wallet service for belajar-orm."""

import logging

from belajar_orm.exceptions import InsufficientBalanceError, RecordNotFoundError
from belajar_orm.orm.repository.wallet import AggregationResult
from belajar_orm.orm.service.base import BaseService
from belajar_orm.orm.uow import BelajarUnitOfWork

logger = logging.getLogger("belajar-orm")


class WalletService(BaseService):
    """Balance transfers and statistics."""

    def _create_uow(self) -> BelajarUnitOfWork:
        return BelajarUnitOfWork(self.session_factory)

    def transfer(self, from_user_id: str, to_user_id: str, amount: int) -> tuple[int, int]:
        """Move ``amount`` from one user's wallet to another's.

        Both wallets are locked, in user id order, for the duration of the transaction.

        Returns:
            The resulting (sender, receiver) balances.

        Raises:
            ValueError: If amount is not positive or both users are the same.
            RecordNotFoundError: If either user has no wallet.
            InsufficientBalanceError: If the sender holds less than ``amount``.
        """
        if amount <= 0:
            raise ValueError(f"Transfer amount must be positive, got {amount}")  # noqa: TRY003
        if from_user_id == to_user_id:
            raise ValueError("Cannot transfer to the same user")  # noqa: TRY003

        with self._create_uow() as uow:
            wallets = {}
            for user_id in sorted((from_user_id, to_user_id)):
                wallet = uow.wallets.get_by_user_id_for_update(user_id)
                if wallet is None:
                    raise RecordNotFoundError("Wallet", user_id)
                wallets[user_id] = wallet

            sender, receiver = wallets[from_user_id], wallets[to_user_id]
            if sender.balance < amount:
                raise InsufficientBalanceError(from_user_id, sender.balance, amount)

            sender.balance -= amount
            receiver.balance += amount
            uow.user_logs.log(from_user_id, f"transfer {amount} to {to_user_id}")
            uow.commit()
            logger.info(f"Transferred {amount} from '{from_user_id}' to '{to_user_id}'")
            return sender.balance, receiver.balance

    def statistics(self) -> AggregationResult:
        with self._create_uow() as uow:
            return uow.wallets.aggregate()
