"""
Transaction model - represents one income or expense entry.
"""

from typing import Optional
from datetime import date, datetime, timezone
from sqlmodel import SQLModel, Field


class Transaction(SQLModel, table=True):
    """Represents an income or expense transaction owned by a user."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    text: str
    amount_cents: int  # signed: negative for expense, positive for income
    type: str  # "expense" or "income"
    category: str  # e.g., "Food", "Salary"
    transaction_date: date = Field(index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
