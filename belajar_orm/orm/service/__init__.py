"""Service layer for belajar-orm.

Services own the unit of work lifecycle and expose multi-step operations:
- UserService: registration, renaming under a row lock, activity logging
- WalletService: balance transfers and statistics
"""

from belajar_orm.orm.service.user_service import UserService
from belajar_orm.orm.service.wallet_service import WalletService

__all__ = ["UserService", "WalletService"]
