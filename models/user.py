"""
User model - an account that owns a set of transactions.
"""

from typing import Optional
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """Represents a signed-up account."""
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)  # stored lower-cased
    password_hash: str  # bcrypt hash, never the plain password
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
