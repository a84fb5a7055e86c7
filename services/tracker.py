"""
Tracker service - drives one user's ledger from the record store.
Subscribes the ledger to store snapshots, validates and submits form drafts
(create or update depending on the edit session) and deletes records.
Failures come back as results; nothing here raises to the UI.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from services.aggregator import LedgerView, build_view
from services.common import TypeFilter
from services.edit_session import EditSession
from services.errors import CommandError, ErrorKind, StoreError
from services.ledger import Ledger
from services.record_store import RecordStore, Unsubscribe
from services.validator import NormalizedCommand, TransactionDraft, validate_create_or_update

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitOutcome:
    """
    Result of a form submit.
    `session` is the edit session the caller should hold afterwards.
    """
    session: EditSession
    record_id: Optional[str] = None
    command: Optional[NormalizedCommand] = None
    error: Optional[CommandError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of a delete request."""
    record_id: str
    error: Optional[CommandError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TrackerService:
    """
    One user's view of the ledger.
    The ledger only changes when the store pushes a snapshot; submits and
    deletes become visible through that push, never through a local overlay.
    """

    def __init__(self, store: RecordStore, user_id: int):
        self.store = store
        self.user_id = user_id
        self.ledger = Ledger()
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def is_started(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> Optional[CommandError]:
        """Subscribe the ledger to the user's snapshots (idempotent)."""
        if self._unsubscribe is not None:
            return None
        try:
            self._unsubscribe = self.store.subscribe(self.user_id, self.ledger.replace_all)
        except StoreError as e:
            logger.error(f"Could not subscribe to transactions of user {self.user_id}: {e}")
            return CommandError(kind=ErrorKind.STORE_ERROR, detail=str(e))
        logger.info(f"Tracking transactions of user {self.user_id}")
        return None

    def stop(self) -> None:
        """Release the store subscription (on logout)."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
            logger.info(f"Stopped tracking transactions of user {self.user_id}")

    def view(self, year: int, month: int,
             type_filter: Union[TypeFilter, str] = TypeFilter.ALL) -> LedgerView:
        """Dashboard figures for a month from the latest snapshot."""
        return build_view(self.ledger.records, year, month, type_filter)

    def submit(self, draft: TransactionDraft, session: EditSession) -> SubmitOutcome:
        """
        Validate a draft and send it to the store.

        While `session` is editing, the draft updates that record; otherwise it
        creates a new one. On success the session returns to Idle; on any
        failure the session is handed back unchanged.

        Args:
            draft: Form input
            session: Current edit session

        Returns:
            SubmitOutcome with the next session and either the command or the error
        """
        result = validate_create_or_update(draft)
        if not result.ok:
            return SubmitOutcome(session=session, error=result.error)

        command = result.command
        try:
            if session.is_editing:
                self.store.update(self.user_id, session.editing_id, command)
                record_id = session.editing_id
            else:
                record_id = self.store.create(self.user_id, command)
        except StoreError as e:
            logger.error(f"Store error while saving transaction: {e}")
            return SubmitOutcome(
                session=session,
                command=command,
                error=CommandError(kind=ErrorKind.STORE_ERROR, detail=str(e))
            )

        return SubmitOutcome(session=session.finish(), record_id=record_id, command=command)

    def delete(self, record_id: str) -> DeleteOutcome:
        """Delete a record; a failure is logged and reported, not retried."""
        try:
            self.store.delete(self.user_id, record_id)
        except StoreError as e:
            logger.error(f"Store error while deleting transaction {record_id}: {e}")
            return DeleteOutcome(
                record_id=record_id,
                error=CommandError(kind=ErrorKind.STORE_ERROR, detail=str(e))
            )
        return DeleteOutcome(record_id=record_id)

    def begin_edit(self, record_id: str,
                   session: Optional[EditSession] = None) -> Tuple[EditSession, Optional[TransactionDraft]]:
        """
        Enter Editing(record_id) with a draft prefilled from the current snapshot.

        Returns:
            (session, draft); the session is unchanged and the draft None when
            the record is not in the snapshot
        """
        session = session or EditSession.idle()
        record = self.ledger.get(record_id)
        if record is None:
            logger.warning(f"Cannot edit unknown transaction {record_id}")
            return session, None
        return session.begin(record_id), TransactionDraft.from_record(record)

    @staticmethod
    def cancel_edit(session: EditSession) -> EditSession:
        return session.cancel()
