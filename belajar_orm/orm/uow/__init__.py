"""Unit of Work (UoW) pattern implementations for belajar-orm.

Provides transaction management and repository coordination:
- BaseUnitOfWork: Abstract base class with common patterns
- SimpleUnitOfWork: Session lifecycle only, no repositories
- BelajarUnitOfWork: Every belajar-orm repository over one session
- transaction: Run a callable in one commit-or-rollback block
"""

from belajar_orm.orm.uow.base import BaseUnitOfWork, SimpleUnitOfWork, transaction
from belajar_orm.orm.uow.belajar_uow import BelajarUnitOfWork

__all__ = [
    "BaseUnitOfWork",
    "BelajarUnitOfWork",
    "SimpleUnitOfWork",
    "transaction",
]
