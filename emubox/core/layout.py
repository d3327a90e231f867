"""Viewport geometry derived from the scanned entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from emubox.config import PAGE_SIZE, VIEWPORT_EXTRA_COLUMNS, VIEWPORT_EXTRA_ROWS

if TYPE_CHECKING:
    from emubox.core.entries import EntrySet


@dataclass(frozen=True, slots=True)
class LayoutMetrics:
    """Size of the bordered viewport.

    ``column_capacity`` is the viewport height in rows: one page of at most
    PAGE_SIZE entries plus the border, title and separator. ``row_width`` is
    the width in columns: the longest name plus room for the numbering and
    the border.
    """
    column_capacity: int
    row_width: int

    @classmethod
    def for_entries(cls, entries: "EntrySet") -> "LayoutMetrics":
        return compute_layout(len(entries), entries.max_name_length)


def compute_layout(entry_count: int, max_name_length: int) -> LayoutMetrics:
    if entry_count < 0 or max_name_length < 0:
        raise ValueError("entry_count and max_name_length must be non-negative")
    return LayoutMetrics(
        column_capacity=min(entry_count, PAGE_SIZE) + VIEWPORT_EXTRA_ROWS,
        row_width=max_name_length + VIEWPORT_EXTRA_COLUMNS,
    )
