from __future__ import annotations

import logging

from .. import config
from ..errors import LayoutError
from .content import ContinuationHeader, FontStyle, HeaderBlock, SignatureBlock, SummaryBlock, resolve_widths
from .cursor import LayoutCursor
from .measure import HEADER_FIRST_LINE, HEADER_LINE_STEP, HEADER_ROW_HEIGHT, measure_header, measure_summary
from .tables import draw_row

logger = logging.getLogger(__name__)


def _frame(canvas, x: float, y: float, width: float, height: float) -> None:
    canvas.draw_line(x, y, x + width, y)
    canvas.draw_line(x, y - height, x + width, y - height)
    canvas.draw_line(x, y, x, y - height)
    canvas.draw_line(x + width, y, x + width, y - height)


def render_header(canvas, cursor: LayoutCursor, header: HeaderBlock) -> float:
    """Institution lines on the left, number/heading/date rows on the right."""
    height = measure_header(header)
    if cursor.needs_new_page(height):
        cursor.break_page()
    x, y, width = canvas.margin, cursor.y, canvas.content_width
    right = x + width / 2
    _frame(canvas, x, y, width, height)
    canvas.draw_line(right, y, right, y - height)

    for number, line in enumerate(header.left_lines):
        style = FontStyle.BOLD if number == 0 else FontStyle.REGULAR
        canvas.draw_text(x + 10, y - HEADER_FIRST_LINE - number * HEADER_LINE_STEP, style, 9, line)

    row_y = y
    canvas.draw_text(right + 5, row_y - 20, FontStyle.REGULAR, 10, header.number.label)
    canvas.draw_text(right + 80, row_y - 20, FontStyle.BOLD, 10, header.number.value)
    if header.number.secondary:
        canvas.draw_text(right + 180, row_y - 20, FontStyle.REGULAR, 10, header.number.secondary)

    row_y -= HEADER_ROW_HEIGHT
    canvas.draw_line(right, row_y, x + width, row_y)
    canvas.draw_text(right + 5, row_y - 20, FontStyle.BOLD, 14, header.heading)
    if header.subheading:
        offset = canvas.string_width(header.heading, FontStyle.BOLD, 14) + 15
        canvas.draw_text(right + 5 + offset, row_y - 20, FontStyle.REGULAR, 10, header.subheading)

    row_y -= HEADER_ROW_HEIGHT
    canvas.draw_line(right, row_y, x + width, row_y)
    canvas.draw_text(right + 5, row_y - 20, FontStyle.REGULAR, 10, header.date.label)
    canvas.draw_text(right + 80, row_y - 20, FontStyle.REGULAR, 10, header.date.value)

    if header.party is not None:
        row_y -= HEADER_ROW_HEIGHT
        canvas.draw_line(right, row_y, x + width, row_y)
        canvas.draw_text(right + 5, row_y - 20, FontStyle.REGULAR, 10, header.party.label)
        party_style = FontStyle.BOLD if header.party.emphasized else FontStyle.REGULAR
        canvas.draw_text(right + 100, row_y - 20, party_style, 10, header.party.value)

    return cursor.advance(height)


def render_continuation(canvas, cursor: LayoutCursor, header: ContinuationHeader) -> float:
    x, y, width = canvas.margin, cursor.y, canvas.content_width
    _frame(canvas, x, y, width, header.height)
    canvas.draw_text(x + 10, y - 20, FontStyle.BOLD, 10, header.title)
    canvas.draw_text(x + 10, y - 35, FontStyle.REGULAR, 9, header.subtitle(cursor.page_number))
    canvas.draw_text(
        x + width - 150, y - 20, FontStyle.REGULAR, 8, f"{header.number_label} {header.report_number}"
    )
    canvas.draw_text(
        x + width - 150, y - 35, FontStyle.REGULAR, 8, f"Data: {header.report_date.strftime(config.DATE_FORMAT)}"
    )
    return cursor.advance(header.height + header.gap)


def render_summary(canvas, cursor: LayoutCursor, block: SummaryBlock) -> float:
    """
    Frequency table with a bold total row. An empty block draws nothing
    and leaves the cursor where it was.

    A block that fits on one page is never split. A taller one continues on
    the following pages, each starting with the column header row.
    """
    if block.is_empty:
        return cursor.y
    height = measure_summary(block)
    opening = block.title_height + 2 * block.row_height
    if cursor.needs_new_page(height) and (cursor.fits_on_empty_page(height) or cursor.needs_new_page(opening)):
        cursor.break_page()
    if cursor.needs_new_page(opening):
        raise LayoutError(f"Summary '{block.title}' header and one row do not fit on an empty page")

    x = canvas.margin
    widths = resolve_widths(block.columns, canvas.content_width)
    count = len(block.columns)
    labels = [column.label for column in block.columns]
    canvas.draw_text(x, cursor.y - 12, FontStyle.BOLD, 10, block.title)
    cursor.advance(block.title_height)
    draw_row(canvas, x, cursor.y, widths, labels, block.row_height, [FontStyle.BOLD] * count)
    cursor.advance(block.row_height)

    rows = [(entry.cells(), FontStyle.REGULAR, block.columns) for entry in block.entries]
    rows.append((block.total.cells(), FontStyle.BOLD, None))
    for cells, style, columns in rows:
        if cursor.needs_new_page(block.row_height):
            cursor.break_page()
            logger.debug("Summary '%s' continues on page %s", block.title, cursor.page_number)
            draw_row(canvas, x, cursor.y, widths, labels, block.row_height, [FontStyle.BOLD] * count)
            cursor.advance(block.row_height)
        draw_row(canvas, x, cursor.y, widths, cells, block.row_height, [style] * count, columns)
        cursor.advance(block.row_height)

    return cursor.y


def signature_slots(x: float, width: float, count: int) -> list[float]:
    slot = width / 3
    if count == 1:
        return [x + width - slot / 2]
    return [x + slot / 2 + index * slot for index in range(count)]


def render_signature(canvas, cursor: LayoutCursor, block: SignatureBlock) -> float:
    if cursor.needs_new_page(block.height, floor=block.reserve):
        cursor.break_page()
    x, width = canvas.margin, canvas.content_width
    slot = width / 3
    base = cursor.y - block.height
    anchor = x + width - slot / 2
    canvas.draw_text(anchor - 60, base + 40, FontStyle.BOLD, 10, block.actor)
    caption = f"{block.caption} {block.signed_on.strftime(config.DATE_FORMAT)}"
    canvas.draw_text(anchor - 70, base + 25, FontStyle.REGULAR, 9, caption)
    for center, label in zip(signature_slots(x, width, len(block.slots)), block.slots):
        canvas.draw_dotted_line(center - 50, base, center + 50, base)
        canvas.draw_text(center - 15, base - 15, FontStyle.REGULAR, 8, label)
    return cursor.advance(block.height)
