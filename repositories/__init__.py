"""
Repositories package for PocketLedger.
Provides data access layer for all database operations.
"""

from repositories.user_repository import UserRepository
from repositories.transaction_repository import TransactionRepository
from repositories.user_preferences_repository import UserPreferencesRepository

__all__ = [
    'UserRepository',
    'TransactionRepository',
    'UserPreferencesRepository',
]
