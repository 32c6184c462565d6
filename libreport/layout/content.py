"""
Content models consumed by the section renderers.

None of these know where they end up on a page; the renderers place them at
the layout cursor's current offset.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Sequence, Tuple

TOTAL_LABEL = "RAZEM"


class PageFormat(str, Enum):
    A4 = "A4"
    A5 = "A5"


class TableKind(str, Enum):
    INVENTORY = "INVENTORY"
    POPULARITY = "POPULARITY"
    OVERDUE = "OVERDUE"
    RECEIPT = "RECEIPT"


class FontStyle(str, Enum):
    REGULAR = "regular"
    BOLD = "bold"


@dataclass(frozen=True)
class Column:
    label: str
    width: Optional[float] = None  # None: take whatever content width is left
    budget: Optional[int] = None


ColumnSpec = Tuple[Column, ...]


def resolve_widths(columns: Sequence[Column], content_width: float) -> list[float]:
    fixed = sum(column.width for column in columns if column.width is not None)
    flexible = [column for column in columns if column.width is None]
    share = max(0.0, content_width - fixed) / len(flexible) if flexible else 0.0
    return [column.width if column.width is not None else share for column in columns]


@dataclass(frozen=True)
class Row:
    cells: Tuple[Optional[str], ...]
    emphasis: bool = False


@dataclass(frozen=True)
class TableModel:
    kind: TableKind
    columns: ColumnSpec
    rows: Tuple[Row, ...] = ()
    row_height: float = 25.0
    header_height: float = 25.0
    footer: Optional[Row] = None
    footer_start: int = 0
    emphasis_column: int = -1


@dataclass(frozen=True)
class SummaryEntry:
    label: Optional[str]
    count: int
    extra: Tuple[str, ...] = ()

    def cells(self) -> Tuple[str, ...]:
        return (self.label or "", str(self.count), *self.extra)


@dataclass(frozen=True)
class SummaryBlock:
    title: str
    columns: ColumnSpec
    entries: Tuple[SummaryEntry, ...]
    total: SummaryEntry
    row_height: float = 25.0
    title_height: float = 20.0

    @classmethod
    def counts(
        cls,
        title: str,
        label_header: str,
        entries: Sequence[SummaryEntry],
        count_header: str = "Ilość",
        label_width: float = 200.0,
    ) -> "SummaryBlock":
        columns = (Column(label_header, label_width), Column(count_header))
        entries = tuple(entries)
        total = SummaryEntry(TOTAL_LABEL, sum(entry.count for entry in entries))
        return cls(title=title, columns=columns, entries=entries, total=total)

    @property
    def is_empty(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class HeaderField:
    label: str
    value: str = ""
    secondary: str = ""
    emphasized: bool = False


@dataclass(frozen=True)
class HeaderBlock:
    """Two-pane document header: institution lines left, labelled rows right."""

    left_lines: Tuple[str, ...]
    number: HeaderField
    heading: str
    date: HeaderField
    subheading: str = ""
    party: Optional[HeaderField] = None


@dataclass(frozen=True)
class ContinuationHeader:
    title: str
    label: str
    report_number: str
    report_date: date
    height: float = 50.0
    gap: float = 20.0
    number_label: str = "Nr raportu:"

    def subtitle(self, page_number: int) -> str:
        return self.label.format(page=page_number)


@dataclass(frozen=True)
class SignatureBlock:
    actor: str
    caption: str
    signed_on: date
    slots: Tuple[str, ...] = ("podpis",)
    height: float = 80.0
    reserve: float = 150.0


@dataclass(frozen=True)
class LayoutProfile:
    header_gap: float = 20.0
    section_spacing: float = 40.0
    min_bottom_margin: float = 50.0
    continuation_height: float = 50.0
    continuation_gap: float = 20.0
    signature_height: float = 80.0
    signature_reserve: float = 150.0


@dataclass(frozen=True)
class ReportContext:
    title: str
    report_number: str
    report_date: date
    generated_by: str
    organization: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None


@dataclass(frozen=True)
class ReportDocument:
    context: ReportContext
    header: HeaderBlock
    table: TableModel
    continuation_label: str
    signature: SignatureBlock
    summaries: Tuple[SummaryBlock, ...] = ()
    profile: LayoutProfile = field(default_factory=LayoutProfile)
    pdf_title: str = ""
    pdf_author: str = ""
