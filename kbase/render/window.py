"""Pure list-windowing and truncation math for the command list."""

from __future__ import annotations

RESERVED_ROWS = 8
MIN_LIST_HEIGHT = 5
DESCRIPTION_LIMIT = 50
ELLIPSIS = "..."


def list_height(height: int) -> int:
    """Rows available to the command list for a terminal ``height``."""
    return max(height - RESERVED_ROWS, MIN_LIST_HEIGHT)


def visible_range(cursor: int, height: int, count: int) -> tuple[int, int]:
    """Return the ``[start, end)`` slice of list rows to draw.

    The window is centered on ``cursor`` and pinned to the end of the list
    when centering would run past it.
    """
    rows = list_height(height)
    start = max(cursor - rows // 2, 0)
    end = start + rows
    if end > count:
        end = count
        start = max(end - rows, 0)
    return start, end


def truncate_description(desc: str, limit: int = DESCRIPTION_LIMIT) -> str:
    if len(desc) > limit:
        return desc[:limit] + ELLIPSIS
    return desc
