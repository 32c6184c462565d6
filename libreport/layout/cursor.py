from __future__ import annotations

from typing import Optional
import logging

logger = logging.getLogger(__name__)


class LayoutCursor:
    """
    Vertical write position on the current page, in PDF units from the bottom.

    Every block renderer reads `y`, draws downward from it and advances by
    exactly the height it measured. Tables and summaries taller than a page
    split across pages; everything else checks `needs_new_page` first.
    """

    def __init__(self, canvas, min_bottom_margin: float = 50.0) -> None:
        self.canvas = canvas
        self.min_bottom_margin = min_bottom_margin
        self.y = canvas.top_y

    @property
    def page_number(self) -> int:
        return self.canvas.page_number

    @property
    def content_height(self) -> float:
        return self.canvas.top_y - self.min_bottom_margin

    def remaining(self, floor: Optional[float] = None) -> float:
        bottom = self.min_bottom_margin if floor is None else floor
        return self.y - bottom

    def needs_new_page(self, required: float, floor: Optional[float] = None) -> bool:
        return self.remaining(floor) < required

    def fits_on_empty_page(self, required: float) -> bool:
        return required <= self.content_height

    def advance(self, height: float) -> float:
        self.y -= height
        return self.y

    def break_page(self) -> int:
        page = self.canvas.new_page()
        self.y = self.canvas.top_y
        logger.debug("Page break -> page %s", page)
        return page
