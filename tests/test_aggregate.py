from __future__ import annotations

from datetime import date

from libreport.layout.content import SummaryEntry
from libreport.pipeline.aggregate import count_by, count_loans, overdue_category_summary, sum_by
from libreport.pipeline.records import BookRecord, LoanRecord, OverdueRecord, overdue_category

TODAY = date(2024, 5, 31)


def _book(book_id: str, status: str | None, genre: str | None = "Powieść", publisher: str | None = "PWN") -> BookRecord:
    return BookRecord(book_id, f"Tytuł {book_id}", "Autor", publisher, status, genre)


def _overdue(loan_id: str, due: date, genre: str | None = "Powieść") -> OverdueRecord:
    return OverdueRecord(
        loan_id=loan_id,
        book_id=f"B{loan_id}",
        title="Lalka",
        authors="Bolesław Prus",
        publisher="PIW",
        genre=genre,
        user_id="U1",
        user_name="Anna",
        user_email="anna@example.com",
        borrowed_at=date(2024, 4, 1),
        due_date=due,
    )


def test_count_by_orders_by_count_then_label() -> None:
    books = [_book("1", "Dostępna"), _book("2", "Wypożyczona"), _book("3", "Dostępna"), _book("4", "Archiwalna")]
    assert count_by(books, lambda b: b.status) == (
        SummaryEntry("Dostępna", 2),
        SummaryEntry("Archiwalna", 1),
        SummaryEntry("Wypożyczona", 1),
    )


def test_missing_values_count_as_unknown() -> None:
    books = [_book("1", None), _book("2", "Dostępna", genre=None)]
    statuses = dict((entry.label, entry.count) for entry in count_by(books, lambda b: b.status))
    genres = dict((entry.label, entry.count) for entry in count_by(books, lambda b: b.genre))
    assert statuses["Nieznany"] == 1
    assert genres["Nieznany"] == 1


def test_ensured_labels_appear_with_zero() -> None:
    entries = count_by([], lambda b: b.status, ensure=("Wypożyczona",))
    assert entries == (SummaryEntry("Wypożyczona", 0),)


def test_sum_by_weights_entries() -> None:
    books = [_book("1", "x", genre="Fantasy"), _book("2", "x", genre="Kryminał"), _book("3", "x", genre="Fantasy")]
    loans = {"1": 4, "2": 7, "3": 1}
    assert sum_by(books, lambda b: b.genre, lambda b: loans[b.book_id]) == (
        SummaryEntry("Kryminał", 7),
        SummaryEntry("Fantasy", 5),
    )


def test_count_loans_respects_period() -> None:
    loans = [
        LoanRecord("1", date(2024, 1, 10)),
        LoanRecord("1", date(2024, 2, 10)),
        LoanRecord("2", date(2024, 3, 10)),
    ]
    assert count_loans(loans) == {"1": 2, "2": 1}
    assert count_loans(loans, start=date(2024, 2, 1)) == {"1": 1, "2": 1}
    assert count_loans(loans, end=date(2024, 2, 10)) == {"1": 2}


def test_overdue_categories() -> None:
    assert overdue_category(0) == "Brak zaległości"
    assert overdue_category(7) == "Do 7 dni"
    assert overdue_category(8) == "8-14 dni"
    assert overdue_category(30) == "15-30 dni"
    assert overdue_category(31) == "Powyżej 30 dni"


def test_overdue_summary_orders_longest_first() -> None:
    records = [
        _overdue("1", date(2024, 5, 28)),  # 3 days
        _overdue("2", date(2024, 4, 1)),  # 60 days
        _overdue("3", date(2024, 5, 26)),  # 5 days
        _overdue("4", date(2024, 6, 5)),  # not overdue
    ]
    entries, total_days = overdue_category_summary(records, TODAY)
    assert [entry.label for entry in entries] == ["Powyżej 30 dni", "Do 7 dni"]
    assert entries[1] == SummaryEntry("Do 7 dni", 2, ("8", "4.0"))
    assert total_days == 68


def test_overdue_days_relative_to_today() -> None:
    record = _overdue("1", date(2024, 5, 1))
    assert record.overdue_days(TODAY) == 30
    assert record.overdue_days(date(2024, 4, 30)) == 0
    assert not record.is_overdue(date(2024, 5, 1))
