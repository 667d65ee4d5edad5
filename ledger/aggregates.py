from collections import defaultdict
from decimal import Decimal
from functools import reduce
from typing import Dict, Iterable, Optional, Tuple

from ledger.domain import (
    CategoryBreakdown,
    CategoryShare,
    DominantCategory,
    Transaction,
)

ZERO = Decimal("0")


def balance(trans: Iterable[Transaction]) -> Decimal:
    return reduce(
        lambda acc, t: acc + t.amount if t.is_income else acc - t.amount, trans, ZERO
    )


def total_income(trans: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in trans if t.is_income), ZERO)


def total_expense(trans: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in trans if t.is_expense), ZERO)


def highest_expense(trans: Iterable[Transaction]) -> Optional[Transaction]:
    # max() keeps the first of equal amounts
    return max((t for t in trans if t.is_expense), key=lambda t: t.amount, default=None)


def _expense_totals(trans: Iterable[Transaction]) -> Dict[str, Decimal]:
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for t in trans:
        if t.is_expense:
            totals[t.category] += t.amount
    return totals


def dominant_category(trans: Iterable[Transaction]) -> Optional[DominantCategory]:
    totals = _expense_totals(trans)
    if not totals:
        return None
    category, total = max(totals.items(), key=lambda item: item[1])
    return DominantCategory(category=category, total=total)


def group_by_category(trans: Iterable[Transaction]) -> Tuple[CategoryBreakdown, ...]:
    """Income and expense totals per category, in first-seen category order."""
    grouped: Dict[str, Dict[str, Decimal]] = {}
    for t in trans:
        bucket = grouped.setdefault(t.category, {"income": ZERO, "expense": ZERO})
        bucket["income" if t.is_income else "expense"] += t.amount

    return tuple(
        CategoryBreakdown(
            category=category,
            income_total=values["income"],
            expense_total=values["expense"],
        )
        for category, values in grouped.items()
    )


def expense_shares_by_category(trans: Iterable[Transaction]) -> Tuple[CategoryShare, ...]:
    return tuple(
        CategoryShare(category=category, amount=total)
        for category, total in _expense_totals(trans).items()
        if total > 0
    )
