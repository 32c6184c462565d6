from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional
import logging

from reportlab.lib.pagesizes import A4, A5
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from .. import config
from ..errors import ConfigurationError
from .content import FontStyle, PageFormat

logger = logging.getLogger(__name__)

PAGE_SIZES = {
    PageFormat.A4: A4,
    PageFormat.A5: A5,
}

REGULAR_FONT_NAME = "ReportSans"
BOLD_FONT_NAME = "ReportSans-Bold"


@dataclass(frozen=True)
class FontSet:
    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"

    def name(self, style: FontStyle | str) -> str:
        return self.bold if FontStyle(style) == FontStyle.BOLD else self.regular


def _register(name: str, path: Path) -> None:
    pdfmetrics.registerFont(TTFont(name, str(path)))


def register_fonts(regular_path: Optional[Path] = None, bold_path: Optional[Path] = None) -> FontSet:
    """
    Register a TrueType pair able to draw Polish diacritics.
    Explicit paths must exist; otherwise the first installed candidate pair
    is used, and Helvetica when none is installed.
    """
    if regular_path is not None or bold_path is not None:
        regular = Path(regular_path) if regular_path else None
        bold = Path(bold_path) if bold_path else regular
        if regular is None:
            regular = bold
        for path in (regular, bold):
            if not path.exists():
                raise ConfigurationError(f"Font file not found: {path}")
        try:
            _register(REGULAR_FONT_NAME, regular)
            _register(BOLD_FONT_NAME, bold)
        except TTFError as exc:
            raise ConfigurationError(f"Unusable font file: {exc}") from exc
        return FontSet(REGULAR_FONT_NAME, BOLD_FONT_NAME)

    for regular, bold in config.FONT_CANDIDATES:
        if not (Path(regular).exists() and Path(bold).exists()):
            continue
        try:
            _register(REGULAR_FONT_NAME, Path(regular))
            _register(BOLD_FONT_NAME, Path(bold))
        except TTFError as exc:
            logger.warning("Skipping font pair %s: %s", regular, exc)
            continue
        logger.debug("Using fonts %s / %s", regular, bold)
        return FontSet(REGULAR_FONT_NAME, BOLD_FONT_NAME)
    logger.warning("No TrueType font found; falling back to Helvetica")
    return FontSet()


def page_size(page_format: PageFormat | str) -> tuple[float, float]:
    try:
        return PAGE_SIZES[PageFormat(page_format)]
    except ValueError as exc:
        raise ConfigurationError(f"Unsupported page format: {page_format}") from exc


class PageCanvas:
    """Drawing primitives over a reportlab canvas writing to memory."""

    def __init__(
        self,
        page_format: PageFormat | str = PageFormat.A4,
        fonts: Optional[FontSet] = None,
        margin: float = config.PAGE_MARGIN,
        title: str = "",
        author: str = "",
    ) -> None:
        self.page_width, self.page_height = page_size(page_format)
        self.margin = margin
        self.fonts = fonts or FontSet()
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=(self.page_width, self.page_height))
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)
        self._finished = False

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def top_y(self) -> float:
        return self.page_height - self.margin

    @property
    def page_number(self) -> int:
        return self._canvas.getPageNumber()

    def string_width(self, text: str, style: FontStyle | str, size: float) -> float:
        return self._canvas.stringWidth(text, self.fonts.name(style), size)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._canvas.line(x1, y1, x2, y2)

    def draw_dotted_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._canvas.saveState()
        self._canvas.setDash(1, 2)
        self._canvas.line(x1, y1, x2, y2)
        self._canvas.restoreState()

    def draw_text(self, x: float, y: float, style: FontStyle | str, size: float, text: str) -> None:
        self._canvas.setFont(self.fonts.name(style), size)
        self._canvas.drawString(x, y, text)

    def new_page(self) -> int:
        self._canvas.showPage()
        return self.page_number

    def finish(self) -> bytes:
        if self._finished:
            raise RuntimeError("Document already serialized")
        # save() closes the open page itself
        self._canvas.save()
        self._finished = True
        return self._buffer.getvalue()
