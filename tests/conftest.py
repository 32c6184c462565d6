from __future__ import annotations

from typing import List, Tuple

import pytest

from libreport.layout.content import FontStyle


class RecordingCanvas:
    """Stands in for PageCanvas and keeps every primitive it is asked to draw."""

    def __init__(self, page_width: float = 300.0, page_height: float = 400.0, margin: float = 30.0) -> None:
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.page_number = 1
        self.ops: List[Tuple] = []
        self.finished = False

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def top_y(self) -> float:
        return self.page_height - self.margin

    def string_width(self, text: str, style, size: float) -> float:
        return len(text) * size * 0.5

    def draw_line(self, x1, y1, x2, y2) -> None:
        self.ops.append(("line", self.page_number, x1, y1, x2, y2))

    def draw_dotted_line(self, x1, y1, x2, y2) -> None:
        self.ops.append(("dotted", self.page_number, x1, y1, x2, y2))

    def draw_text(self, x, y, style, size, text) -> None:
        self.ops.append(("text", self.page_number, x, y, FontStyle(style), size, text))

    def new_page(self) -> int:
        self.page_number += 1
        self.ops.append(("page", self.page_number))
        return self.page_number

    def finish(self) -> bytes:
        self.finished = True
        return b"%PDF-recorded"

    def texts(self, page: int | None = None) -> List[Tuple]:
        return [op for op in self.ops if op[0] == "text" and (page is None or op[1] == page)]

    def text_values(self, page: int | None = None) -> List[str]:
        return [op[6] for op in self.texts(page)]

    def primitives(self) -> List[Tuple]:
        return [op for op in self.ops if op[0] != "page"]


@pytest.fixture
def recording_canvas() -> RecordingCanvas:
    return RecordingCanvas()
