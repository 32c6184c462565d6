"""
Height of every block as its renderer will draw it.

Renderers advance the cursor by exactly these values, so page-break decisions
made from a measurement hold when the block is drawn.
"""
from __future__ import annotations

from typing import List

from ..errors import LayoutError
from .content import HeaderBlock, LayoutProfile, SignatureBlock, SummaryBlock, TableModel

HEADER_MIN_HEIGHT = 120.0
HEADER_LINE_STEP = 12.0
HEADER_FIRST_LINE = 15.0
HEADER_ROW_HEIGHT = 30.0


def table_height(row_count: int, row_height: float, header_height: float, footer: bool = False) -> float:
    # the column header is drawn even without rows
    rows = max(0, row_count) + (1 if footer else 0)
    return header_height + rows * row_height


def measure_table(table: TableModel) -> float:
    return table_height(len(table.rows), table.row_height, table.header_height, table.footer is not None)


def summary_height(entry_count: int, row_height: float, title_height: float = 20.0) -> float:
    if entry_count <= 0:
        return 0.0
    # title, column header, entries, total
    return title_height + (entry_count + 2) * row_height


def measure_summary(block: SummaryBlock) -> float:
    return summary_height(len(block.entries), block.row_height, block.title_height)


def header_height(left_lines: int, right_rows: int) -> float:
    left = HEADER_FIRST_LINE + HEADER_LINE_STEP * max(0, left_lines)
    right = HEADER_ROW_HEIGHT * max(0, right_rows)
    return max(HEADER_MIN_HEIGHT, left, right)


def header_rows(header: HeaderBlock) -> int:
    return 3 + (1 if header.party is not None else 0)


def measure_header(header: HeaderBlock) -> float:
    return header_height(len(header.left_lines), header_rows(header))


def continuation_height(profile: LayoutProfile) -> float:
    return profile.continuation_height + profile.continuation_gap


def signature_height(block: SignatureBlock) -> float:
    return block.height


def plan_table_pages(
    row_count: int,
    first_capacity: float,
    page_capacity: float,
    row_height: float,
    header_height: float,
) -> List[int]:
    """
    Rows placed on each page a table touches.

    `first_capacity` is the space left where the table starts and
    `page_capacity` the space left below a continuation header. A leading 0
    means the table moved to the next page before drawing anything.
    """
    if row_count > 0 and page_capacity < header_height + row_height:
        raise LayoutError("Table header and one row do not fit on an empty page")
    pages: List[int] = []
    left = row_count
    capacity = first_capacity
    while True:
        if left == 0:
            pages.append(0)
            return pages
        if capacity < header_height + row_height:
            pages.append(0)
            capacity = page_capacity
            continue
        fits = int((capacity - header_height) // row_height)
        placed = min(left, fits)
        pages.append(placed)
        left -= placed
        if left == 0:
            return pages
        capacity = page_capacity
