from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import DATE_FORMAT
from .records import BookRecord, LoanRecord, OverdueRecord, ReceiptItem


BOOK_COLUMNS = {"book_id", "title", "authors", "publisher", "status"}
LOAN_COLUMNS = {"book_id", "borrowed_at"}
OVERDUE_COLUMNS = {
    "loan_id",
    "book_id",
    "title",
    "authors",
    "user_id",
    "user_name",
    "user_email",
    "borrowed_at",
    "due_date",
}
ITEM_COLUMNS = {"index", "name", "quantity", "unit", "value"}


def load_rows(csv_path: Path, required: Iterable[str]) -> List[dict]:
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")
    with csv_path.open("r", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            raise ValueError("CSV has no header")
        missing = set(required) - set(reader.fieldnames)
        if missing:
            raise ValueError(f"CSV missing columns: {', '.join(sorted(missing))}")
        rows = [row for row in reader if any((value or "").strip() for value in row.values())]
    if not rows:
        raise ValueError("CSV has no data rows")
    return rows


def _optional(row: dict, key: str) -> Optional[str]:
    value = (row.get(key) or "").strip()
    return value or None


def _required(row: dict, key: str) -> str:
    value = (row.get(key) or "").strip()
    if not value:
        raise ValueError(f"CSV row is missing {key}")
    return value


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise ValueError(f"Invalid date {value!r}, expected {DATE_FORMAT}") from exc


def parse_number(value: str) -> float:
    try:
        return float(value.strip().replace(",", "."))
    except ValueError as exc:
        raise ValueError(f"Invalid number {value!r}") from exc


def load_books(csv_path: Path) -> List[BookRecord]:
    books: List[BookRecord] = []
    seen = set()
    for row in load_rows(csv_path, BOOK_COLUMNS):
        book_id = _required(row, "book_id")
        if book_id in seen:
            raise ValueError(f"Duplicate book_id: {book_id}")
        seen.add(book_id)
        books.append(
            BookRecord(
                book_id=book_id,
                title=_required(row, "title"),
                authors=(row.get("authors") or "").strip(),
                publisher=_optional(row, "publisher"),
                status=_optional(row, "status"),
                genre=_optional(row, "genre"),
                description=(row.get("description") or "").strip(),
            )
        )
    return books


def load_loans(csv_path: Path) -> List[LoanRecord]:
    return [
        LoanRecord(book_id=_required(row, "book_id"), borrowed_at=parse_date(_required(row, "borrowed_at")))
        for row in load_rows(csv_path, LOAN_COLUMNS)
    ]


def load_overdue(csv_path: Path) -> List[OverdueRecord]:
    return [
        OverdueRecord(
            loan_id=_required(row, "loan_id"),
            book_id=_required(row, "book_id"),
            title=_required(row, "title"),
            authors=(row.get("authors") or "").strip(),
            publisher=_optional(row, "publisher"),
            genre=_optional(row, "genre"),
            user_id=_required(row, "user_id"),
            user_name=(row.get("user_name") or "").strip(),
            user_email=(row.get("user_email") or "").strip(),
            borrowed_at=parse_date(_required(row, "borrowed_at")),
            due_date=parse_date(_required(row, "due_date")),
            librarian_id=_optional(row, "librarian_id"),
        )
        for row in load_rows(csv_path, OVERDUE_COLUMNS)
    ]


def load_receipt_items(csv_path: Path) -> List[ReceiptItem]:
    return [
        ReceiptItem(
            index=_required(row, "index"),
            name=_required(row, "name"),
            quantity=parse_number(_required(row, "quantity")),
            unit=(row.get("unit") or "").strip(),
            value=parse_number(_required(row, "value")),
        )
        for row in load_rows(csv_path, ITEM_COLUMNS)
    ]
