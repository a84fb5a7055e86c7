"""
Aggregator - composes ledger primitives into what the dashboard displays
for one (year, month, type filter) selection.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Union

from services.common import TypeFilter
from services.ledger import (
    LedgerRecord,
    LedgerSummary,
    category_breakdown,
    filter_by_type,
    select_for_month,
    summarize_records,
)


@dataclass(frozen=True)
class LedgerView:
    """Display-ready figures for one month and type filter."""
    year: int
    month: int
    type_filter: TypeFilter
    summary: LedgerSummary  # over all records, not only this month
    records: List[LedgerRecord]  # month selection after the type filter
    category_breakdown: Dict[str, Decimal]  # expenses of the month

    @property
    def is_empty(self) -> bool:
        return not self.records


def build_view(all_records: Iterable[LedgerRecord],
               year: int,
               month: int,
               type_filter: Union[TypeFilter, str] = TypeFilter.ALL) -> LedgerView:
    """
    Build the dashboard view for a month.

    The summary covers every record; the listing and the category breakdown
    cover only the selected month. The breakdown is taken before the type
    filter so the expense chart stays populated under an 'income' filter.

    Args:
        all_records: Full current snapshot
        year: Calendar year
        month: Calendar month, 1-12
        type_filter: 'all', 'income' or 'expense'

    Returns:
        LedgerView for the selection
    """
    records = list(all_records)
    selected_filter = TypeFilter(type_filter)
    monthly = select_for_month(records, year, month)

    return LedgerView(
        year=year,
        month=month,
        type_filter=selected_filter,
        summary=summarize_records(records),
        records=filter_by_type(monthly, selected_filter),
        category_breakdown=category_breakdown(monthly),
    )
