"""
Record store - canonical per-user transaction storage.
Defines the contract the ledger depends on and a SQLModel-backed implementation
that pushes the full record set to subscribers after every change.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, List

from sqlalchemy.exc import SQLAlchemyError

from models import Transaction
from repositories import TransactionRepository
from services.common import from_cents, to_cents
from services.errors import StoreError
from services.ledger import LedgerRecord
from services.validator import NormalizedCommand

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[List[LedgerRecord]], None]
Unsubscribe = Callable[[], None]


class RecordStore(ABC):
    """
    Contract of the record store.
    Every method may raise StoreError; nothing is retried.
    """

    @abstractmethod
    def subscribe(self, user_id: int, on_snapshot: SnapshotCallback) -> Unsubscribe:
        """Register for full snapshots of a user's records; returns an unsubscribe callable."""

    @abstractmethod
    def create(self, user_id: int, command: NormalizedCommand) -> str:
        """Store a new record and return its assigned id."""

    @abstractmethod
    def update(self, user_id: int, record_id: str, command: NormalizedCommand) -> None:
        """Replace all mutable fields of an existing record."""

    @abstractmethod
    def delete(self, user_id: int, record_id: str) -> None:
        """Remove a record permanently."""


def to_ledger_record(transaction: Transaction) -> LedgerRecord:
    """Convert a stored row into the ledger's record type."""
    return LedgerRecord(
        id=str(transaction.id),
        text=transaction.text,
        amount=from_cents(transaction.amount_cents),
        type=transaction.type,
        category=transaction.category,
        date=transaction.transaction_date,
    )


def _parse_record_id(record_id: str) -> int:
    try:
        return int(record_id)
    except (TypeError, ValueError) as e:
        raise StoreError(f"Unknown transaction id: {record_id!r}") from e


class SqlRecordStore(RecordStore):
    """
    RecordStore over the Transaction table.
    After each successful write the owner's subscribers receive a fresh snapshot.
    """

    def __init__(self):
        self._subscribers: Dict[int, List[SnapshotCallback]] = {}
        self._lock = threading.Lock()

    def load_snapshot(self, user_id: int) -> List[LedgerRecord]:
        """Read every record of a user, in creation order."""
        try:
            rows = TransactionRepository.get_by_user(user_id)
        except SQLAlchemyError as e:
            logger.error(f"Error loading transactions for user {user_id}: {e}")
            raise StoreError("Could not load transactions") from e
        return [to_ledger_record(row) for row in rows]

    def subscribe(self, user_id: int, on_snapshot: SnapshotCallback) -> Unsubscribe:
        snapshot = self.load_snapshot(user_id)

        with self._lock:
            self._subscribers.setdefault(user_id, []).append(on_snapshot)
        on_snapshot(snapshot)

        def _unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(user_id, [])
                if on_snapshot in callbacks:
                    callbacks.remove(on_snapshot)
                if not callbacks:
                    self._subscribers.pop(user_id, None)

        return _unsubscribe

    def subscriber_count(self, user_id: int) -> int:
        with self._lock:
            return len(self._subscribers.get(user_id, []))

    def create(self, user_id: int, command: NormalizedCommand) -> str:
        try:
            transaction = TransactionRepository.add(
                user_id=user_id,
                text=command.text,
                amount_cents=to_cents(command.amount),
                transaction_type=command.type,
                category=command.category,
                transaction_date=command.date
            )
        except (SQLAlchemyError, OverflowError) as e:
            logger.error(f"Error creating transaction for user {user_id}: {e}")
            raise StoreError("Could not create transaction") from e

        logger.info(f"Created transaction {transaction.id} for user {user_id}")
        self._publish(user_id)
        return str(transaction.id)

    def update(self, user_id: int, record_id: str, command: NormalizedCommand) -> None:
        transaction_id = _parse_record_id(record_id)
        try:
            updated = TransactionRepository.update(
                transaction_id=transaction_id,
                user_id=user_id,
                text=command.text,
                amount_cents=to_cents(command.amount),
                transaction_type=command.type,
                category=command.category,
                transaction_date=command.date
            )
        except (SQLAlchemyError, OverflowError) as e:
            logger.error(f"Error updating transaction {record_id}: {e}")
            raise StoreError("Could not update transaction") from e

        if updated is None:
            raise StoreError(f"Transaction {record_id} not found")

        logger.info(f"Updated transaction {record_id} for user {user_id}")
        self._publish(user_id)

    def delete(self, user_id: int, record_id: str) -> None:
        transaction_id = _parse_record_id(record_id)
        try:
            deleted = TransactionRepository.delete(transaction_id, user_id)
        except SQLAlchemyError as e:
            logger.error(f"Error deleting transaction {record_id}: {e}")
            raise StoreError("Could not delete transaction") from e

        if not deleted:
            raise StoreError(f"Transaction {record_id} not found")

        logger.info(f"Deleted transaction {record_id} for user {user_id}")
        self._publish(user_id)

    def _publish(self, user_id: int) -> None:
        """Push the current full snapshot to the user's subscribers."""
        with self._lock:
            callbacks = list(self._subscribers.get(user_id, []))
        if not callbacks:
            return

        try:
            snapshot = self.load_snapshot(user_id)
        except StoreError:
            # The write is committed; subscribers catch up on the next change.
            return

        logger.debug(f"Publishing {len(snapshot)} records to {len(callbacks)} subscriber(s) of user {user_id}")
        for callback in callbacks:
            callback(snapshot)
