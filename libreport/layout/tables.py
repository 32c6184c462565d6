from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Sequence
import logging

from ..errors import LayoutError
from .content import Column, FontStyle, Row, TableModel, resolve_widths
from .cursor import LayoutCursor
from .text import cell_text

logger = logging.getLogger(__name__)

CELL_FONT_SIZE = 8
CELL_PADDING_X = 5.0
CELL_BASELINE = 15.0

ContinuationCallback = Callable[[LayoutCursor], None]


class TableState(str, Enum):
    DRAWING_HEADER = "DRAWING_HEADER"
    DRAWING_ROWS = "DRAWING_ROWS"
    PAGE_FULL = "PAGE_FULL"
    DRAWING_CONTINUATION_HEADER = "DRAWING_CONTINUATION_HEADER"
    DONE = "DONE"


def draw_row(
    canvas,
    x: float,
    y: float,
    widths: Sequence[float],
    cells: Sequence[Optional[str]],
    height: float,
    styles: Sequence[FontStyle],
    columns: Optional[Sequence[Column]] = None,
    start: int = 0,
) -> None:
    """
    One framed grid row with its top edge at `y`.
    `start` skips leading columns, used by footer rows that begin mid-table.
    """
    left = x + sum(widths[:start])
    right = x + sum(widths)
    canvas.draw_line(left, y, right, y)
    canvas.draw_line(left, y - height, right, y - height)
    cell_x = left
    canvas.draw_line(cell_x, y, cell_x, y - height)
    for offset, width in enumerate(widths[start:]):
        index = start + offset
        value = cells[offset] if offset < len(cells) else None
        budget = columns[index].budget if columns is not None else None
        text = cell_text(value, budget)
        if text:
            canvas.draw_text(cell_x + CELL_PADDING_X, y - CELL_BASELINE, styles[offset], CELL_FONT_SIZE, text)
        cell_x += width
        canvas.draw_line(cell_x, y, cell_x, y - height)


def _row_styles(table: TableModel, row: Row, count: int) -> list[FontStyle]:
    styles = [FontStyle.REGULAR] * count
    if row.emphasis and count:
        styles[table.emphasis_column] = FontStyle.BOLD
    return styles


def render_table(
    canvas,
    cursor: LayoutCursor,
    table: TableModel,
    continuation: ContinuationCallback,
) -> float:
    """
    Draw `table` from the cursor position, splitting it across pages.

    Every page the table touches shows the column header above at least one
    body row; pages after the first start with the continuation header.
    Returns the Y below the last drawn row.
    """
    x = canvas.margin
    widths = resolve_widths(table.columns, canvas.content_width)
    labels = [column.label for column in table.columns]
    header_styles = [FontStyle.BOLD] * len(table.columns)
    pending: list[tuple[Row, int, bool]] = [(row, 0, False) for row in table.rows]
    if table.footer is not None:
        pending.append((table.footer, table.footer_start, True))
    first_row = table.header_height + table.row_height
    index = 0
    state = TableState.DRAWING_HEADER

    while state != TableState.DONE:
        if state == TableState.DRAWING_HEADER:
            required = first_row if index < len(pending) else table.header_height
            if cursor.needs_new_page(required):
                state = TableState.PAGE_FULL
                continue
            draw_row(canvas, x, cursor.y, widths, labels, table.header_height, header_styles)
            cursor.advance(table.header_height)
            state = TableState.DRAWING_ROWS

        elif state == TableState.DRAWING_ROWS:
            if index >= len(pending):
                state = TableState.DONE
                continue
            if cursor.needs_new_page(table.row_height):
                state = TableState.PAGE_FULL
                continue
            row, start, footer = pending[index]
            styles = [FontStyle.BOLD] * len(row.cells) if footer else _row_styles(table, row, len(row.cells))
            # footer cells are not bound by the budgets of the columns they span
            columns = None if footer else table.columns
            draw_row(canvas, x, cursor.y, widths, row.cells, table.row_height, styles, columns, start)
            cursor.advance(table.row_height)
            index += 1

        elif state == TableState.PAGE_FULL:
            cursor.break_page()
            state = TableState.DRAWING_CONTINUATION_HEADER

        elif state == TableState.DRAWING_CONTINUATION_HEADER:
            continuation(cursor)
            required = first_row if index < len(pending) else table.header_height
            if cursor.needs_new_page(required):
                raise LayoutError(
                    f"{table.kind.value} table header and one row do not fit below the continuation header"
                )
            logger.debug("%s table continues on page %s at row %s", table.kind.value, cursor.page_number, index)
            state = TableState.DRAWING_HEADER

    return cursor.y
