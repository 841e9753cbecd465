"""User service for belajar-orm.

Groups multi-step user operations into single transactions.
"""

import dataclasses
import logging

from belajar_orm.exceptions import RecordNotFoundError
from belajar_orm.orm.schema import Address, Name, User, Wallet
from belajar_orm.orm.service.base import BaseService
from belajar_orm.orm.uow import BelajarUnitOfWork

logger = logging.getLogger("belajar-orm")


class UserService(BaseService):
    """Registration, renaming and activity logging for users."""

    def _create_uow(self) -> BelajarUnitOfWork:
        return BelajarUnitOfWork(self.session_factory)

    def register(
        self,
        user_id: str,
        password: str,
        name: Name,
        balance: int = 0,
        addresses: list[str] | None = None,
    ) -> str:
        """Create a user together with its wallet and addresses.

        Either every row is written or none is.

        Returns:
            The id of the new user.
        """
        with self._create_uow() as uow:
            user = User(
                id=user_id,
                password=password,
                name=name,
                wallet=Wallet(balance=balance),
                addresses=[Address(address=address) for address in addresses or []],
            )
            uow.users.create(user)
            uow.user_logs.log(user.id, "register")
            uow.commit()
            logger.info(f"Registered user '{user.id}' with {len(user.addresses)} address(es)")
            return user.id

    def rename(self, user_id: str, first_name: str) -> Name:
        """Change a user's first name while holding its row lock.

        Raises:
            RecordNotFoundError: If the user does not exist.
        """
        with self._create_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is None:
                raise RecordNotFoundError("User", user_id)
            # Composite values are replaced, not mutated in place.
            user.name = dataclasses.replace(user.name, first_name=first_name)
            uow.user_logs.log(user_id, "rename")
            uow.commit()
            return user.name

    def record(self, user_id: str, action: str) -> int:
        """Append a log entry and return its id."""
        with self._create_uow() as uow:
            entry = uow.user_logs.log(user_id, action)
            uow.commit()
            return entry.id
