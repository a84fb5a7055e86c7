"""
Command validation - the gatekeeper in front of the record store.
Turns a form draft into a normalized, sign-adjusted command or a typed error.
"""

import logging
import datetime
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from services.common import (
    MAX_AMOUNT,
    TransactionType,
    categories_for,
    default_category,
    parse_decimal,
    quantize_amount,
)
from services.errors import CommandError, ErrorKind
from services.ledger import LedgerRecord

logger = logging.getLogger(__name__)


@dataclass
class TransactionDraft:
    """
    Raw form input for a create or update.
    `amount` is an unsigned magnitude; the sign comes from `type`.
    """
    text: str = ""
    amount: Union[str, int, float, Decimal, None] = None
    type: str = TransactionType.EXPENSE.value
    category: str = default_category(TransactionType.EXPENSE)
    date: Union[datetime.date, str, None] = None

    @classmethod
    def from_record(cls, record: LedgerRecord) -> "TransactionDraft":
        """Prefill a draft from an existing record (amount back to magnitude)."""
        return cls(
            text=record.text,
            amount=abs(record.amount),
            type=record.type,
            category=record.category,
            date=record.date,
        )


@dataclass(frozen=True)
class NormalizedCommand:
    """A validated record ready for the store; `amount` is signed."""
    text: str
    amount: Decimal
    type: str
    category: str
    date: datetime.date


@dataclass(frozen=True)
class ValidationResult:
    """Either a command (accepted) or an error (rejected)."""
    command: Optional[NormalizedCommand] = None
    error: Optional[CommandError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def accept(cls, command: NormalizedCommand) -> "ValidationResult":
        return cls(command=command)

    @classmethod
    def reject(cls, kind: ErrorKind, detail: str = "") -> "ValidationResult":
        logger.debug(f"Command rejected ({kind.value}): {detail}")
        return cls(error=CommandError(kind=kind, detail=detail))


def _parse_date(value: Union[datetime.date, str, None]) -> Optional[datetime.date]:
    """Accept a date or an ISO 'YYYY-MM-DD' string; anything else is missing."""
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def validate_create_or_update(draft: TransactionDraft) -> ValidationResult:
    """
    Validate a draft. Rules are checked in order and the first failure wins:

    1. text non-empty and a valid date present, else MissingField
    2. amount a number strictly greater than zero and no larger than
       MAX_AMOUNT, else InvalidAmount
    3. category belongs to the declared type, else InvalidCategory

    Args:
        draft: Form input

    Returns:
        ValidationResult holding the NormalizedCommand or the CommandError
    """
    record_date = _parse_date(draft.date)
    if not (draft.text or "").strip() or record_date is None:
        return ValidationResult.reject(ErrorKind.MISSING_FIELD, "text and date are required")

    try:
        magnitude = parse_decimal(draft.amount)
    except ValueError as e:
        return ValidationResult.reject(ErrorKind.INVALID_AMOUNT, str(e))
    if abs(magnitude) > MAX_AMOUNT:
        return ValidationResult.reject(ErrorKind.INVALID_AMOUNT, f"amount too large, got {draft.amount!r}")
    magnitude = quantize_amount(magnitude)
    if magnitude <= 0:
        return ValidationResult.reject(ErrorKind.INVALID_AMOUNT, f"amount must be positive, got {draft.amount!r}")

    allowed = categories_for(draft.type)
    if draft.category not in allowed:
        return ValidationResult.reject(
            ErrorKind.INVALID_CATEGORY,
            f"{draft.category!r} is not a category for type {draft.type!r}"
        )

    transaction_type = TransactionType(draft.type)
    signed = -magnitude if transaction_type is TransactionType.EXPENSE else magnitude

    return ValidationResult.accept(NormalizedCommand(
        text=draft.text,
        amount=signed,
        type=transaction_type.value,
        category=draft.category,
        date=record_date,
    ))
