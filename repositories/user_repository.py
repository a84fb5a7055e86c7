"""
User Repository - data access layer for User model.
"""

from typing import Optional
from sqlmodel import Session, select

from db_engine import get_engine
from models import User


class UserRepository:
    """Repository for User lookups and sign-up."""

    @staticmethod
    def add(email: str, password_hash: str) -> User:
        """Create a user. The caller is responsible for normalizing the email."""
        with Session(get_engine()) as session:
            user = User(email=email, password_hash=password_hash)
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    @staticmethod
    def get_by_email(email: str) -> Optional[User]:
        """Retrieve a user by (normalized) email address."""
        with Session(get_engine()) as session:
            statement = select(User).where(User.email == email)
            results = session.exec(statement)
            return results.first()

