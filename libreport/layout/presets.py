from __future__ import annotations

from typing import Dict

from .content import Column, ColumnSpec, LayoutProfile, SummaryBlock, SummaryEntry, TableKind, TOTAL_LABEL

COLUMN_SPECS: Dict[TableKind, ColumnSpec] = {
    TableKind.INVENTORY: (
        Column("Lp.", 30),
        Column("ID", 60),
        Column("Tytuł", 160, 30),
        Column("Autor(zy)", 120, 25),
        Column("Wydawca", 90, 20),
        Column("Status"),
    ),
    TableKind.POPULARITY: (
        Column("Lp.", 20),
        Column("Rank", 25),
        Column("ID", 50),
        Column("Tytuł", 140, 25),
        Column("Autor(zy)", 110, 20),
        Column("Wydawca", 80, 15),
        Column("Gatunek", 50, 10),
        Column("Wypożyczeń"),
    ),
    TableKind.OVERDUE: (
        Column("Lp.", 20),
        Column("ID wyp.", 45),
        Column("Tytuł", 100, 20),
        Column("Autor", 80, 15),
        Column("Użytkownik", 70, 12),
        Column("Email", 120, 30),
        Column("Termin", 50),
        Column("Dni zaleg."),
    ),
    TableKind.RECEIPT: (
        Column("Lp.", 30),
        Column("Indeks", 100),
        Column("Nazwa narzędzia, wymiar"),
        Column("Ilość", 50),
        Column("jm", 50),
        Column("Wartość ISO", 50),
    ),
}

CONTINUATION_LABELS: Dict[TableKind, str] = {
    TableKind.INVENTORY: "Kontynuacja raportu - strona {page}",
    TableKind.POPULARITY: "Kontynuacja raportu popularności - strona {page}",
    TableKind.OVERDUE: "Kontynuacja - strona {page}",
    TableKind.RECEIPT: "Kontynuacja dokumentu - strona {page}",
}

LIBRARY_PROFILE = LayoutProfile(header_gap=20.0, section_spacing=40.0, min_bottom_margin=50.0)
OVERDUE_PROFILE = LayoutProfile(header_gap=25.0, section_spacing=25.0, min_bottom_margin=120.0)

# Receipt footer label sits under the quantity column.
RECEIPT_FOOTER_START = 3

OVERDUE_CATEGORY_COLUMNS: ColumnSpec = (
    Column("Kategoria", 120),
    Column("Liczba", 80),
    Column("Łączne dni", 100),
    Column("Średnia"),
)


def column_spec(kind: TableKind) -> ColumnSpec:
    return COLUMN_SPECS[kind]


def profile_for(kind: TableKind) -> LayoutProfile:
    return OVERDUE_PROFILE if kind == TableKind.OVERDUE else LIBRARY_PROFILE


def overdue_category_block(entries: tuple[SummaryEntry, ...], total_days: int) -> SummaryBlock:
    """Overdue loans per delay bucket with total and average days overdue."""
    count = sum(entry.count for entry in entries)
    average = total_days / count if count else 0.0
    total = SummaryEntry(TOTAL_LABEL, count, (str(total_days), f"{average:.1f}"))
    return SummaryBlock(
        title="Podsumowanie zaległości:",
        columns=OVERDUE_CATEGORY_COLUMNS,
        entries=entries,
        total=total,
    )
