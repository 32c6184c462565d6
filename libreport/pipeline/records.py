from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

UNKNOWN = "Nieznany"
BORROWED_STATUS = "Wypożyczona"

CATEGORY_NONE = "Brak zaległości"
CATEGORY_ORDER = ("Powyżej 30 dni", "15-30 dni", "8-14 dni", "Do 7 dni")
LONG_OVERDUE_DAYS = 30


@dataclass(frozen=True)
class BookRecord:
    book_id: str
    title: str
    authors: str
    publisher: Optional[str]
    status: Optional[str]
    genre: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class LoanRecord:
    book_id: str
    borrowed_at: date


@dataclass(frozen=True)
class OverdueRecord:
    loan_id: str
    book_id: str
    title: str
    authors: str
    publisher: Optional[str]
    genre: Optional[str]
    user_id: str
    user_name: str
    user_email: str
    borrowed_at: date
    due_date: date
    librarian_id: Optional[str] = None

    def overdue_days(self, today: date) -> int:
        return max(0, (today - self.due_date).days)

    def is_overdue(self, today: date) -> bool:
        return self.overdue_days(today) > 0


@dataclass(frozen=True)
class ReceiptItem:
    index: str
    name: str
    quantity: float
    unit: str
    value: float


def overdue_category(days: int) -> str:
    if days <= 0:
        return CATEGORY_NONE
    if days <= 7:
        return "Do 7 dni"
    if days <= 14:
        return "8-14 dni"
    if days <= LONG_OVERDUE_DAYS:
        return "15-30 dni"
    return "Powyżej 30 dni"


@dataclass(frozen=True)
class ReceiptHeader:
    """Parties and numbers printed above a warehouse receipt."""

    company: str
    description: str
    address: str
    street: str
    nip: str
    document_number: str
    reference_number: str
    received_on: date
    recipient: str
    received_by: str
