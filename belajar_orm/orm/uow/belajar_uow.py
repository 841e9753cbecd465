"""Unit of Work exposing every belajar-orm repository.

Repositories are created lazily on first access and share the unit of work's session,
so everything done through them commits or rolls back together.
"""

from collections.abc import Callable

from sqlalchemy.orm import Session

from belajar_orm.orm.repository.address import AddressRepository
from belajar_orm.orm.repository.guest_book import GuestBookRepository
from belajar_orm.orm.repository.product import ProductRepository
from belajar_orm.orm.repository.sample import SampleRepository
from belajar_orm.orm.repository.todo import TodoRecordRepository, TodoRepository
from belajar_orm.orm.repository.user import UserRepository
from belajar_orm.orm.repository.user_log import UserLogRepository
from belajar_orm.orm.repository.wallet import WalletRepository
from belajar_orm.orm.uow.base import BaseUnitOfWork


class BelajarUnitOfWork(BaseUnitOfWork):
    """Unit of Work over users, wallets, addresses, todos, products, logs, guest books and samples.

    Example:
        >>> with BelajarUnitOfWork(SessionFactory) as uow:
        ...     uow.users.add(User(id="1", name=Name("Nathan")))
        ...     uow.wallets.add(Wallet(user_id="1", balance=1_000_000))
        ...     uow.commit()
    """

    def __init__(self, session_factory: Callable[[], Session]):
        super().__init__(session_factory)
        self._reset_repositories()

    def _reset_repositories(self) -> None:
        """Reset all repository references to None."""
        self._user_repo: UserRepository | None = None
        self._user_log_repo: UserLogRepository | None = None
        self._wallet_repo: WalletRepository | None = None
        self._address_repo: AddressRepository | None = None
        self._todo_repo: TodoRepository | None = None
        self._todo_record_repo: TodoRecordRepository | None = None
        self._product_repo: ProductRepository | None = None
        self._guest_book_repo: GuestBookRepository | None = None
        self._sample_repo: SampleRepository | None = None

    @property
    def users(self) -> UserRepository:
        """Get the User repository.

        Raises:
            SessionNotSetError: If session is not initialized.
        """
        return self._get_repository("_user_repo", UserRepository)

    @property
    def user_logs(self) -> UserLogRepository:
        return self._get_repository("_user_log_repo", UserLogRepository)

    @property
    def wallets(self) -> WalletRepository:
        return self._get_repository("_wallet_repo", WalletRepository)

    @property
    def addresses(self) -> AddressRepository:
        return self._get_repository("_address_repo", AddressRepository)

    @property
    def todos(self) -> TodoRepository:
        return self._get_repository("_todo_repo", TodoRepository)

    @property
    def todo_records(self) -> TodoRecordRepository:
        return self._get_repository("_todo_record_repo", TodoRecordRepository)

    @property
    def products(self) -> ProductRepository:
        return self._get_repository("_product_repo", ProductRepository)

    @property
    def guest_books(self) -> GuestBookRepository:
        return self._get_repository("_guest_book_repo", GuestBookRepository)

    @property
    def samples(self) -> SampleRepository:
        return self._get_repository("_sample_repo", SampleRepository)
