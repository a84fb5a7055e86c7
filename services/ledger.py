"""
Ledger - in-memory holder of the latest transaction snapshot.
Owns derived aggregates (totals, category sums) and the month/type selections
used by the dashboard. Every figure is accumulated with exact Decimal arithmetic.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union

from services.common import TransactionType, TypeFilter, quantize_amount

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class LedgerRecord:
    """One income or expense entry as reported by the record store."""
    id: str
    text: str
    amount: Decimal  # signed: negative for expense, positive for income
    type: str  # "expense" or "income"
    category: str
    date: date

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE.value


@dataclass(frozen=True)
class LedgerSummary:
    """Totals over a record set, rounded to cents."""
    total_balance: Decimal
    total_income: Decimal
    total_expense: Decimal  # absolute value


def summarize_records(records: Iterable[LedgerRecord]) -> LedgerSummary:
    """
    Compute balance, income and expense totals.

    Income and expense are classified by the sign of `amount`, not by `type`,
    so a record whose type disagrees with its sign is still counted once.

    Args:
        records: Records to total

    Returns:
        LedgerSummary with balance == income - expense
    """
    income = ZERO
    expense = ZERO
    for record in records:
        if record.amount > 0:
            income += record.amount
        elif record.amount < 0:
            expense += record.amount

    total_income = quantize_amount(income)
    total_expense = quantize_amount(-expense)
    return LedgerSummary(
        total_balance=total_income - total_expense,
        total_income=total_income,
        total_expense=total_expense,
    )


def filter_by_type(records: Iterable[LedgerRecord],
                   type_or_all: Union[TypeFilter, str] = TypeFilter.ALL) -> List[LedgerRecord]:
    """
    Keep only records of the given type; 'all' keeps everything.

    Raises:
        ValueError: If `type_or_all` is not one of all/income/expense
    """
    type_filter = TypeFilter(type_or_all)
    if type_filter is TypeFilter.ALL:
        return list(records)
    return [r for r in records if r.type == type_filter.value]


def category_breakdown(records: Iterable[LedgerRecord]) -> Dict[str, Decimal]:
    """
    Sum absolute expense amounts per category.

    Only expense records contribute; categories that never appear are absent.
    Keys keep the order in which each category is first seen.
    """
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for record in records:
        if record.is_expense:
            totals[record.category] += abs(record.amount)
    return {category: quantize_amount(total) for category, total in totals.items()}


def select_for_month(records: Iterable[LedgerRecord], year: int, month: int) -> List[LedgerRecord]:
    """
    Records dated within a calendar month, most recent first.

    Records on the same date keep their relative input order.

    Args:
        records: Records to select from
        year: Calendar year, e.g. 2024
        month: Calendar month, 1-12; any other value selects nothing
    """
    monthly = [r for r in records if r.date.year == year and r.date.month == month]
    # sorted() is stable with reverse=True, ties stay in input order
    return sorted(monthly, key=lambda r: r.date, reverse=True)


class Ledger:
    """
    Latest full snapshot of one user's transactions plus derived queries.
    The snapshot is replaced wholesale on every store notification.
    """

    def __init__(self, records: Optional[Iterable[LedgerRecord]] = None):
        self._records: Dict[str, LedgerRecord] = {}
        self._summary: Optional[LedgerSummary] = None
        if records is not None:
            self.replace_all(records)

    def replace_all(self, records: Iterable[LedgerRecord]) -> None:
        """
        Replace the entire in-memory set with a new snapshot.

        Nothing from the previous snapshot survives. A repeated id keeps its
        first position and its last value.
        """
        snapshot: Dict[str, LedgerRecord] = {}
        for record in records:
            snapshot[record.id] = record
        self._records = snapshot
        self._summary = None
        logger.debug(f"Ledger snapshot replaced with {len(snapshot)} records")

    @property
    def records(self) -> List[LedgerRecord]:
        """Current records in snapshot order."""
        return list(self._records.values())

    def get(self, record_id: str) -> Optional[LedgerRecord]:
        """Look up a record of the current snapshot by id."""
        return self._records.get(record_id)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def summarize(self) -> LedgerSummary:
        """Totals over the entire snapshot (cached until the next replace_all)."""
        if self._summary is None:
            self._summary = summarize_records(self._records.values())
        return self._summary

    def select_for_month(self, year: int, month: int) -> List[LedgerRecord]:
        """Records of the given month, ordered by date descending."""
        return select_for_month(self._records.values(), year, month)

    @staticmethod
    def filter_by_type(records: Iterable[LedgerRecord],
                       type_or_all: Union[TypeFilter, str] = TypeFilter.ALL) -> List[LedgerRecord]:
        return filter_by_type(records, type_or_all)

    @staticmethod
    def category_breakdown(records: Iterable[LedgerRecord]) -> Dict[str, Decimal]:
        return category_breakdown(records)
