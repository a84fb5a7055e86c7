"""
Services package for PocketLedger.
Provides core business logic separated from presentation and data layers.
"""

from services.common import (
    TransactionType,
    TypeFilter,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    CURRENCY_SYMBOLS,
    categories_for,
    currency_symbol,
    format_money,
    shift_month,
    month_label,
)
from services.errors import CommandError, ErrorKind, StoreError, AuthError
from services.ledger import Ledger, LedgerRecord, LedgerSummary
from services.aggregator import LedgerView, build_view
from services.validator import (
    TransactionDraft,
    NormalizedCommand,
    ValidationResult,
    validate_create_or_update,
)
from services.edit_session import EditSession
from services.record_store import RecordStore, SqlRecordStore
from services.tracker import TrackerService, SubmitOutcome, DeleteOutcome
from services.auth import AuthService, AuthenticatedUser, friendly_auth_message
from services.preferences import PreferencesService, Preferences

__all__ = [
    # Common definitions
    'TransactionType',
    'TypeFilter',
    'EXPENSE_CATEGORIES',
    'INCOME_CATEGORIES',
    'CURRENCY_SYMBOLS',
    'categories_for',
    'currency_symbol',
    'format_money',
    'shift_month',
    'month_label',
    # Errors
    'CommandError',
    'ErrorKind',
    'StoreError',
    'AuthError',
    # Ledger core
    'Ledger',
    'LedgerRecord',
    'LedgerSummary',
    'LedgerView',
    'build_view',
    'TransactionDraft',
    'NormalizedCommand',
    'ValidationResult',
    'validate_create_or_update',
    'EditSession',
    # Services
    'RecordStore',
    'SqlRecordStore',
    'TrackerService',
    'SubmitOutcome',
    'DeleteOutcome',
    'AuthService',
    'AuthenticatedUser',
    'friendly_auth_message',
    'PreferencesService',
    'Preferences',
]
