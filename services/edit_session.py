"""
Edit session - which record (if any) the transaction form is editing.
Idle -> Editing(id) -> Idle, on a successful submit or an explicit cancel.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EditSession:
    """Immutable session value; transitions return a new session."""
    editing_id: Optional[str] = None

    @classmethod
    def idle(cls) -> "EditSession":
        return cls()

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def begin(self, record_id: str) -> "EditSession":
        """Start editing a record, replacing any edit already in progress."""
        if not record_id:
            raise ValueError("record_id is required to start editing")
        return EditSession(editing_id=record_id)

    def finish(self) -> "EditSession":
        """Back to Idle after a successful submit."""
        return EditSession.idle()

    def cancel(self) -> "EditSession":
        """Back to Idle without submitting."""
        return EditSession.idle()
