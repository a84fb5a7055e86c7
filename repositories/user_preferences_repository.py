"""
UserPreferences Repository - data access layer for UserPreferences model.
"""

from typing import Optional
from sqlmodel import Session, select

from db_engine import get_engine
from models import UserPreferences


class UserPreferencesRepository:
    """Repository for UserPreferences CRUD operations (one row per user)."""

    @staticmethod
    def get(user_id: int) -> Optional[UserPreferences]:
        """Retrieve a user's preferences, or None if never saved."""
        with Session(get_engine()) as session:
            statement = select(UserPreferences).where(UserPreferences.user_id == user_id)
            results = session.exec(statement)
            return results.first()

    @staticmethod
    def save_theme(user_id: int, theme: str) -> UserPreferences:
        """Save or update user theme preference."""
        with Session(get_engine()) as session:
            statement = select(UserPreferences).where(UserPreferences.user_id == user_id)
            results = session.exec(statement)
            prefs = results.first()

            if prefs:
                prefs.theme = theme
            else:
                prefs = UserPreferences(user_id=user_id, theme=theme)
            session.add(prefs)
            session.commit()
            session.refresh(prefs)
            return prefs

    @staticmethod
    def save_currency_code(user_id: int, currency_code: str) -> UserPreferences:
        """Save or update user currency preference."""
        with Session(get_engine()) as session:
            statement = select(UserPreferences).where(UserPreferences.user_id == user_id)
            results = session.exec(statement)
            prefs = results.first()

            if prefs:
                prefs.currency_code = currency_code
            else:
                prefs = UserPreferences(user_id=user_id, currency_code=currency_code)
            session.add(prefs)
            session.commit()
            session.refresh(prefs)
            return prefs
