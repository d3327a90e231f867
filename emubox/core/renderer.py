"""Stateless drawing adapter for the selection menu.

A renderer turns the menu's inputs into a `Frame`: an ordered list of draw
instructions over a ``row_width x column_capacity`` canvas. Front-ends paint
the frame however they like; tests compare frames or their text lines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from emubox.config import MENU_TITLE
from emubox.core.entries import EntrySet
from emubox.core.layout import LayoutMetrics
from emubox.core.menu import MenuState, layout_page

HLINE = "─"
VLINE = "│"
TOP_LEFT, TOP_RIGHT = "┌", "┐"
BOTTOM_LEFT, BOTTOM_RIGHT = "└", "┘"


@dataclass(frozen=True, slots=True)
class DrawOp:
    row: int
    col: int
    text: str
    highlight: bool = False


@dataclass(frozen=True, slots=True)
class Frame:
    width: int
    height: int
    ops: tuple[DrawOp, ...]

    def lines(self) -> list[str]:
        """Composite the draw instructions into plain text rows."""
        grid = [[" "] * self.width for _ in range(self.height)]
        for op in self.ops:
            if not 0 <= op.row < self.height:
                continue
            for offset, ch in enumerate(op.text):
                col = op.col + offset
                if 0 <= col < self.width:
                    grid[op.row][col] = ch
        return ["".join(row) for row in grid]

    def highlight_spans(self) -> list[tuple[int, int, int]]:
        """(row, start, end) ranges drawn highlighted, clipped to the canvas."""
        spans = []
        for op in self.ops:
            if op.highlight and 0 <= op.row < self.height:
                start = max(op.col, 0)
                end = min(op.col + len(op.text), self.width)
                if start < end:
                    spans.append((op.row, start, end))
        return spans

    def highlighted_rows(self) -> list[int]:
        return sorted({row for row, _, _ in self.highlight_spans()})


class ViewportRenderer(Protocol):
    def render(self, entries: EntrySet, layout: LayoutMetrics, state: MenuState) -> Frame:
        ...


class TextViewportRenderer:
    """Default renderer: bordered box, title, separator and numbered rows."""

    title = MENU_TITLE
    first_row = 3

    def _border(self, width: int, height: int) -> list[DrawOp]:
        if width < 2 or height < 2:
            return []
        ops = [
            DrawOp(0, 0, TOP_LEFT + HLINE * (width - 2) + TOP_RIGHT),
            DrawOp(height - 1, 0, BOTTOM_LEFT + HLINE * (width - 2) + BOTTOM_RIGHT),
        ]
        for row in range(1, height - 1):
            ops.append(DrawOp(row, 0, VLINE))
            ops.append(DrawOp(row, width - 1, VLINE))
        return ops

    def render(self, entries: EntrySet, layout: LayoutMetrics, state: MenuState) -> Frame:
        width, height = layout.row_width, layout.column_capacity
        ops = [
            DrawOp(1, 2, self.title),
            DrawOp(2, 0, HLINE * width),
        ]
        ops.extend(self._border(width, height))

        page = layout_page(entries, state.page_start, state.selection_index)
        for offset, slot in enumerate(page.slots):
            row = self.first_row + offset
            ops.append(DrawOp(row, slot.label_column, slot.label, slot.selected))
            ops.append(DrawOp(row, slot.label_column + len(slot.label), slot.name, slot.selected))

        return Frame(width=width, height=height, ops=tuple(ops))
