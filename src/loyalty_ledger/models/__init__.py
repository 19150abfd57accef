"""SQLAlchemy models for the loyalty ledger."""

from .monthly_rollover import MonthlyRollover, RolloverStatus
from .monthly_winner import MonthlyWinner
from .profile import Profile, ProfileRole
from .transaction import Transaction, TransactionType

__all__ = [
    "MonthlyRollover",
    "MonthlyWinner",
    "Profile",
    "ProfileRole",
    "RolloverStatus",
    "Transaction",
    "TransactionType",
]
