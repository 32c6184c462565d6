from __future__ import annotations

from typing import Optional

ELLIPSIS = "..."


def truncate(text: Optional[str], budget: Optional[int]) -> str:
    """
    Character-count truncation for table cells.
    Longer strings keep `budget - 3` characters followed by "...".
    """
    if text is None:
        return ""
    if budget is None or len(text) <= budget:
        return text
    keep = max(0, budget - len(ELLIPSIS))
    return text[:keep] + ELLIPSIS


def cell_text(value: object, budget: Optional[int] = None) -> str:
    if value is None:
        return ""
    return truncate(str(value), budget)
