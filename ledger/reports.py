from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple

from ledger.aggregates import (
    balance,
    dominant_category,
    expense_shares_by_category,
    group_by_category,
    highest_expense,
    total_expense,
    total_income,
)
from ledger.domain import (
    CategoryBreakdown,
    CategoryShare,
    FilterCriteria,
    SummaryReport,
    Transaction,
)
from ledger.filters import filter_and_sort


@dataclass(frozen=True)
class DashboardView:
    transactions: Tuple[Transaction, ...]
    report: SummaryReport
    breakdown: Tuple[CategoryBreakdown, ...]
    shares: Tuple[CategoryShare, ...]


def build_report(trans: Iterable[Transaction]) -> SummaryReport:
    """Summary statistics for an already filtered set of transactions."""
    trans = tuple(trans)
    return SummaryReport(
        balance=balance(trans),
        total_income=total_income(trans),
        total_expense=total_expense(trans),
        highest_expense=highest_expense(trans),
        dominant_category=dominant_category(trans),
    )


def build_dashboard(
    trans: Iterable[Transaction],
    criteria: FilterCriteria,
    now: Optional[datetime] = None,
) -> DashboardView:
    filtered = filter_and_sort(trans, criteria, now)
    return DashboardView(
        transactions=filtered,
        report=build_report(filtered),
        breakdown=group_by_category(filtered),
        shares=expense_shares_by_category(filtered),
    )
