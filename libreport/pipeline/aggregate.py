"""
Pure aggregation of business records into summary entries.

Every function returns a fresh tuple; nothing here keeps state between calls.
"""
from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple, TypeVar

from ..layout.content import SummaryEntry
from .records import CATEGORY_ORDER, UNKNOWN, LoanRecord, OverdueRecord, overdue_category

T = TypeVar("T")


def _ordered(counts: Dict[str, int]) -> Tuple[SummaryEntry, ...]:
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return tuple(SummaryEntry(label, count) for label, count in ranked)


def sum_by(
    items: Iterable[T],
    key: Callable[[T], Optional[str]],
    weight: Callable[[T], int],
    ensure: Sequence[str] = (),
) -> Tuple[SummaryEntry, ...]:
    counts: Counter[str] = Counter({label: 0 for label in ensure})
    for item in items:
        counts[key(item) or UNKNOWN] += weight(item)
    return _ordered(dict(counts))


def count_by(
    items: Iterable[T],
    key: Callable[[T], Optional[str]],
    ensure: Sequence[str] = (),
) -> Tuple[SummaryEntry, ...]:
    return sum_by(items, key, lambda _: 1, ensure)


def count_loans(
    loans: Iterable[LoanRecord],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Dict[str, int]:
    counts: Counter[str] = Counter()
    for loan in loans:
        if start is not None and loan.borrowed_at < start:
            continue
        if end is not None and loan.borrowed_at > end:
            continue
        counts[loan.book_id] += 1
    return dict(counts)


def overdue_category_summary(
    records: Iterable[OverdueRecord],
    today: date,
) -> Tuple[Tuple[SummaryEntry, ...], int]:
    """
    Entries per overdue bucket, longest delay first, plus the total of overdue days.
    Each entry carries the bucket's total days and average days as extra cells.
    """
    counts: Counter[str] = Counter()
    days: Counter[str] = Counter()
    for record in records:
        overdue = record.overdue_days(today)
        if overdue <= 0:
            continue
        category = overdue_category(overdue)
        counts[category] += 1
        days[category] += overdue
    entries = tuple(
        SummaryEntry(category, counts[category], (str(days[category]), f"{days[category] / counts[category]:.1f}"))
        for category in CATEGORY_ORDER
        if counts[category]
    )
    return entries, sum(days.values())
