from datetime import datetime, time, timedelta
from typing import Callable, Iterable, Optional, Tuple

from ledger.domain import FilterCriteria, PeriodWindow, Transaction
from ledger.functional import pipe

PERIOD_ALL = "all"
PERIOD_DAY = "day"
PERIOD_WEEK = "week"
PERIOD_LAST_7_DAYS = "today-relative-week"
PERIOD_MONTH = "month"
PERIOD_YEAR = "year"
PERIODS = (PERIOD_ALL, PERIOD_DAY, PERIOD_WEEK, PERIOD_LAST_7_DAYS, PERIOD_MONTH, PERIOD_YEAR)

# lower bound used for "all" and unknown tags
EPOCH = datetime(2000, 1, 1)
END_OF_DAY = time(23, 59, 59)


def resolve_period_window(period: str, now: datetime) -> PeriodWindow:
    """Date window for a period tag, relative to ``now``.

    Every window ends at 23:59:59 of ``now``'s day. ``week`` starts on the
    most recent Sunday (today when today is Sunday).
    """
    today = datetime.combine(now.date(), time.min)
    end = datetime.combine(now.date(), END_OF_DAY)

    if period == PERIOD_DAY:
        start = today
    elif period == PERIOD_WEEK:
        # weekday() is 0 for Monday, so Sunday-based offset is (weekday + 1) % 7
        start = today - timedelta(days=(now.weekday() + 1) % 7)
    elif period == PERIOD_LAST_7_DAYS:
        start = today - timedelta(days=6)
    elif period == PERIOD_MONTH:
        start = today.replace(day=1)
    elif period == PERIOD_YEAR:
        start = today.replace(month=1, day=1)
    else:
        start = EPOCH

    return PeriodWindow(start=start, end=end)


def by_search(term: str) -> Callable[[Transaction], bool]:
    def _filter(t: Transaction) -> bool:
        return t.matches_search(term)

    return _filter


def by_date_range(window: PeriodWindow) -> Callable[[Transaction], bool]:
    def _filter(t: Transaction) -> bool:
        return t.in_range(window.start, window.end)

    return _filter


def filter_and_sort(
    trans: Iterable[Transaction],
    criteria: FilterCriteria,
    now: Optional[datetime] = None,
) -> Tuple[Transaction, ...]:
    """Apply search and period filters, most recent first.

    The period window is resolved on every call; pass ``now`` to pin it.
    """
    steps = []
    if criteria.search_term:
        steps.append(lambda ts: filter(by_search(criteria.search_term), ts))
    if criteria.period != PERIOD_ALL:
        window = resolve_period_window(criteria.period, now or datetime.now())
        steps.append(lambda ts: filter(by_date_range(window), ts))
    # stable: equal dates keep their input order
    steps.append(lambda ts: tuple(sorted(ts, key=lambda t: t.occurred_on, reverse=True)))

    return pipe(trans, *steps)
