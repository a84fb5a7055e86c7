"""
UserPreferences model - stores display preferences per user.
"""

from typing import Optional
from sqlmodel import SQLModel, Field


class UserPreferences(SQLModel, table=True):
    """Stores user preferences and settings."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True, unique=True)
    theme: Optional[str] = Field(default=None)  # "light" or "dark"
    currency_code: Optional[str] = Field(default=None)  # "USD", "EUR", "INR", etc.
