"""Repository module for belajar-orm ORM.

This module provides repository classes for data access layer operations.
"""

from belajar_orm.orm.repository.address import AddressRepository
from belajar_orm.orm.repository.base import GenericRepository, create_repository, repository_context
from belajar_orm.orm.repository.guest_book import GuestBookRepository
from belajar_orm.orm.repository.product import ProductRepository
from belajar_orm.orm.repository.sample import SampleRepository, SampleRow
from belajar_orm.orm.repository.todo import TodoRecordRepository, TodoRepository
from belajar_orm.orm.repository.user import UserRepository, UserResponse
from belajar_orm.orm.repository.user_log import UserLogRepository
from belajar_orm.orm.repository.wallet import AggregationResult, WalletRepository

__all__ = [
    "AddressRepository",
    "AggregationResult",
    "GenericRepository",
    "GuestBookRepository",
    "ProductRepository",
    "SampleRepository",
    "SampleRow",
    "TodoRecordRepository",
    "TodoRepository",
    "UserLogRepository",
    "UserRepository",
    "UserResponse",
    "WalletRepository",
    "create_repository",
    "repository_context",
]
