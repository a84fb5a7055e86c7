"""
Database models for PocketLedger.
All SQLModel table definitions are centralized here.
"""

from models.user import User
from models.transaction import Transaction
from models.user_preferences import UserPreferences

__all__ = [
    'User',
    'Transaction',
    'UserPreferences',
]
