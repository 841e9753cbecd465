from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session


class BaseService(ABC):
    """Abstract base class for all service implementations.

    Provides common patterns for all services:
    - Session factory management
    - Abstract method for UoW creation
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize the service.

        Args:
            session_factory: SQLAlchemy sessionmaker for database connections.
        """
        self.session_factory = session_factory

    @abstractmethod
    def _create_uow(self) -> Any:
        """Create a new Unit of Work instance.

        Subclasses must implement this to return their specific UoW type.
        """
        ...
