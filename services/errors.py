"""
Error taxonomy for PocketLedger.
Validation failures travel as values; collaborator failures are exceptions
that the tracker service converts into typed results.
"""

from dataclasses import dataclass
from enum import Enum

GENERIC_STORE_MESSAGE = "Could not save transaction. Please try again."


class ErrorKind(str, Enum):
    """Kinds of failure a command can report to the caller."""
    MISSING_FIELD = "MissingField"
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_CATEGORY = "InvalidCategory"
    STORE_ERROR = "StoreError"


USER_MESSAGES = {
    ErrorKind.MISSING_FIELD: "Please fill out all fields.",
    ErrorKind.INVALID_AMOUNT: "Amount must be a positive number.",
    ErrorKind.INVALID_CATEGORY: "Please choose a valid category for this transaction type.",
    ErrorKind.STORE_ERROR: GENERIC_STORE_MESSAGE,
}


@dataclass(frozen=True)
class CommandError:
    """A rejected or failed command: what went wrong and what to tell the user."""
    kind: ErrorKind
    detail: str = ""

    @property
    def message(self) -> str:
        return USER_MESSAGES[self.kind]


class StoreError(Exception):
    """Raised when the record store cannot complete an operation."""
    pass


class AuthError(Exception):
    """Raised by the identity collaborator; `code` selects the friendly message."""

    def __init__(self, code: str, message: str = ""):
        super().__init__(message or code)
        self.code = code
