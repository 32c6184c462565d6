from __future__ import annotations

import argparse
import csv
import random
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional

TITLES = [
    "Lalka",
    "Potop",
    "Solaris",
    "Pan Tadeusz",
    "Ferdydurke",
    "Quo Vadis",
    "Chłopi",
    "Przedwiośnie",
    "Wiedźmin: Ostatnie życzenie",
    "Cyberiada",
]
AUTHORS = ["Bolesław Prus", "Henryk Sienkiewicz", "Stanisław Lem", "Adam Mickiewicz", "Witold Gombrowicz"]
PUBLISHERS = ["PIW", "PWN", "Znak", "Wydawnictwo Literackie", ""]
GENRES = ["Powieść", "Fantastyka", "Poezja", "Dramat", ""]
STATUSES = ["Dostępna", "Wypożyczona", "Zarezerwowana", "W naprawie"]
USERS = [
    ("U1", "Anna Nowak", "anna.nowak@example.com"),
    ("U2", "Jan Kowalski", "jan.kowalski@example.com"),
    ("U3", "Ewa Wiśniewska", "ewa.wisniewska@example.com"),
]


def _write(path: Path, fieldnames: List[str], rows: List[dict]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    return path


def generate(out_dir: Path, books: int, today: date, seed: int = 0) -> List[Path]:
    """Write books.csv, loans.csv, overdue.csv and items.csv with reproducible content."""
    rng = random.Random(seed)
    book_rows = []
    for number in range(1, books + 1):
        book_rows.append(
            {
                "book_id": f"B{number:05d}",
                "title": f"{rng.choice(TITLES)} (wyd. {number})",
                "authors": rng.choice(AUTHORS),
                "publisher": rng.choice(PUBLISHERS),
                "status": rng.choice(STATUSES),
                "genre": rng.choice(GENRES),
            }
        )

    loan_rows = []
    overdue_rows = []
    for number, book in enumerate(rng.sample(book_rows, k=min(len(book_rows), books // 2 or 1)), start=1):
        borrowed_at = today - timedelta(days=rng.randint(1, 120))
        due_date = borrowed_at + timedelta(days=30)
        for _ in range(rng.randint(1, 6)):
            loan_rows.append({"book_id": book["book_id"], "borrowed_at": borrowed_at.isoformat()})
        user_id, user_name, user_email = rng.choice(USERS)
        overdue_rows.append(
            {
                "loan_id": f"L{number:05d}",
                "book_id": book["book_id"],
                "title": book["title"],
                "authors": book["authors"],
                "publisher": book["publisher"],
                "genre": book["genre"],
                "user_id": user_id,
                "user_name": user_name,
                "user_email": user_email,
                "borrowed_at": borrowed_at.isoformat(),
                "due_date": due_date.isoformat(),
            }
        )

    item_rows = [
        {
            "index": f"{2000 + number}/BPP/{rng.randint(100, 999)}",
            "name": f"NARZĘDZIE {number}",
            "quantity": rng.randint(1, 50),
            "unit": "szt.",
            "value": f"{rng.uniform(10, 500):.2f}",
        }
        for number in range(1, max(2, books // 10) + 1)
    ]

    return [
        _write(out_dir / "books.csv", list(book_rows[0]) if book_rows else ["book_id"], book_rows),
        _write(out_dir / "loans.csv", ["book_id", "borrowed_at"], loan_rows),
        _write(out_dir / "overdue.csv", list(overdue_rows[0]) if overdue_rows else ["loan_id"], overdue_rows),
        _write(out_dir / "items.csv", ["index", "name", "quantity", "unit", "value"], item_rows),
    ]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate sample CSV inputs for the report commands")
    parser.add_argument("--out", type=Path, default=Path("sample_data"))
    parser.add_argument("--books", type=int, default=200, help="Number of books; large values span many pages")
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args(argv)

    paths = generate(args.out, args.books, date.today(), seed=args.seed)
    for path in paths:
        print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
