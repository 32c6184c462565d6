from __future__ import annotations

from datetime import date
from typing import Dict, List, Sequence, Tuple

from ..layout.content import Row
from .records import LONG_OVERDUE_DAYS, BookRecord, OverdueRecord, ReceiptItem

RECEIPT_FOOTER_LABEL = "Razem dokument"


def polish_decimal(value: float, digits: int = 1) -> str:
    return f"{value:.{digits}f}".replace(".", ",")


def inventory_rows(books: Sequence[BookRecord]) -> Tuple[Row, ...]:
    return tuple(
        Row((str(number), book.book_id, book.title, book.authors, book.publisher, book.status))
        for number, book in enumerate(books, start=1)
    )


def rank_by_loans(books: Sequence[BookRecord], loan_counts: Dict[str, int]) -> List[Tuple[BookRecord, int]]:
    # stable sort keeps input order among equal counts
    ranked = sorted(books, key=lambda book: loan_counts.get(book.book_id, 0), reverse=True)
    return [(book, loan_counts.get(book.book_id, 0)) for book in ranked]


def popularity_rows(ranked: Sequence[Tuple[BookRecord, int]]) -> Tuple[Row, ...]:
    return tuple(
        Row(
            (
                str(number),
                str(number),
                book.book_id,
                book.title,
                book.authors,
                book.publisher,
                book.genre,
                str(loans),
            )
        )
        for number, (book, loans) in enumerate(ranked, start=1)
    )


def overdue_rows(records: Sequence[OverdueRecord], today: date) -> Tuple[Row, ...]:
    rows = []
    for number, record in enumerate(records, start=1):
        days = record.overdue_days(today)
        rows.append(
            Row(
                (
                    str(number),
                    record.loan_id,
                    record.title,
                    record.authors,
                    record.user_name,
                    record.user_email,
                    record.due_date.strftime("%m-%d"),
                    str(days),
                ),
                emphasis=days > LONG_OVERDUE_DAYS,
            )
        )
    return tuple(rows)


def receipt_rows(items: Sequence[ReceiptItem]) -> Tuple[Row, ...]:
    return tuple(
        Row(
            (
                str(number),
                item.index,
                item.name,
                polish_decimal(item.quantity),
                item.unit,
                polish_decimal(item.value),
            )
        )
        for number, item in enumerate(items, start=1)
    )


def receipt_footer(items: Sequence[ReceiptItem]) -> Row:
    total = sum(item.value for item in items)
    return Row((RECEIPT_FOOTER_LABEL, "", polish_decimal(total, 2)), emphasis=True)
