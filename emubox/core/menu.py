"""Paginated, keyboard-driven selection menu.

The menu is a small state machine over a fixed `EntrySet`. It knows nothing
about terminals: key events come in as `MenuKey` values and drawing is
delegated to a `ViewportRenderer` supplied by the caller, which keeps the
whole navigation logic testable without a screen.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Union

from emubox.common.exceptions import EntryOverflow
from emubox.config import MAX_ENTRY_NUMBER, NAME_COLUMN, PAGE_SIZE
from emubox.core.entries import EntrySet
from emubox.core.layout import LayoutMetrics

if TYPE_CHECKING:
    from emubox.core.renderer import Frame, ViewportRenderer

logger = logging.getLogger(__name__)


class MenuKey(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    OTHER = "other"


@dataclass(slots=True)
class MenuState:
    selection_index: int = 0
    page_start: int = 0
    end_of_page: bool = False


@dataclass(frozen=True, slots=True)
class Confirmed:
    index: int


@dataclass(frozen=True, slots=True)
class Cancelled:
    pass


MenuResult = Union[Confirmed, Cancelled]


# ---------------------------------------------------------------------------
# Page layout
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PageSlot:
    """A visible row of the current page."""
    index: int
    label_column: int
    name: str
    selected: bool

    @property
    def position(self) -> int:
        return self.index + 1

    @property
    def label(self) -> str:
        return f"{self.position}. "


@dataclass(frozen=True, slots=True)
class PageLayout:
    slots: tuple[PageSlot, ...]
    end_of_page: bool


def label_column(position: int) -> int:
    """Column where the ``"<n>. "`` label of a 1-based position starts.

    Each extra digit moves the label one column to the left so that every
    label ends right before the name column.

    Raises:
        EntryOverflow: for positions that would need a fifth digit.
    """
    if position < 1:
        raise ValueError(f"Positions start at 1, got {position}")
    if position > MAX_ENTRY_NUMBER:
        raise EntryOverflow(position)
    return NAME_COLUMN - len(str(position)) - 2


def layout_page(entries: EntrySet, page_start: int, selection_index: int) -> PageLayout:
    """Lay out the PAGE_SIZE slots starting at ``page_start``.

    Layout stops at the first absent slot. ``end_of_page`` is set when the
    page runs out of entries or holds the last entry, i.e. when there is no
    following page.
    """
    slots: list[PageSlot] = []
    end_of_page = False
    for index in range(page_start, page_start + PAGE_SIZE):
        entry = entries.get(index)
        if entry is None:
            end_of_page = True
            break
        slots.append(
            PageSlot(
                index=index,
                label_column=label_column(index + 1),
                name=entry.name,
                selected=index == selection_index,
            )
        )
        if entries.get(index + 1) is None:
            end_of_page = True
            break
    return PageLayout(slots=tuple(slots), end_of_page=end_of_page)


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class PaginatedMenu:
    """Selection state machine for one menu session."""

    def __init__(self, entries: EntrySet, layout: Optional[LayoutMetrics] = None):
        if not entries:
            raise ValueError("PaginatedMenu needs at least one entry")
        self.entries = entries
        self.layout = layout or LayoutMetrics.for_entries(entries)
        self.state = MenuState()
        self.result: Optional[MenuResult] = None
        self.refresh_page()

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    @property
    def is_open(self) -> bool:
        return self.result is None

    def refresh_page(self) -> PageLayout:
        page = layout_page(self.entries, self.state.page_start, self.state.selection_index)
        self.state.end_of_page = page.end_of_page
        return page

    def _align_page(self) -> None:
        start = (self.state.selection_index // PAGE_SIZE) * PAGE_SIZE
        if start != self.state.page_start:
            self.state.page_start = start
            self.refresh_page()

    def _move_up(self) -> None:
        self.state.selection_index = max(0, self.state.selection_index - 1)
        self._align_page()

    def _move_down(self) -> None:
        self.state.selection_index = min(self.entry_count - 1, self.state.selection_index + 1)
        self._align_page()

    def _next_page(self) -> None:
        if self.state.end_of_page:
            return
        self.state.page_start += PAGE_SIZE
        self.state.selection_index = self.state.page_start
        self.refresh_page()

    def _previous_page(self) -> None:
        if self.state.page_start == 0:
            return
        self.state.page_start -= PAGE_SIZE
        self.state.selection_index = self.state.page_start
        self.state.end_of_page = False
        self.refresh_page()

    def handle_key(self, key: MenuKey) -> Optional[MenuResult]:
        """Apply one key event; return the result once the menu has closed."""
        if self.result is not None:
            return self.result

        if key is MenuKey.UP:
            self._move_up()
        elif key is MenuKey.DOWN:
            self._move_down()
        elif key is MenuKey.RIGHT:
            self._next_page()
        elif key is MenuKey.LEFT:
            self._previous_page()
        elif key is MenuKey.CONFIRM:
            self.result = Confirmed(self.state.selection_index)
        elif key is MenuKey.CANCEL:
            self.result = Cancelled()

        if self.result is not None:
            logger.debug("Menu closed: %s", self.result)
        return self.result

    def render(self, renderer: "ViewportRenderer") -> "Frame":
        return renderer.render(self.entries, self.layout, self.state)

    def run(
        self,
        read_key: Callable[[], MenuKey],
        draw: Callable[["Frame"], None],
        renderer: "ViewportRenderer",
    ) -> MenuResult:
        """Drive the menu until it is confirmed or cancelled.

        Each iteration draws the current state, then blocks on ``read_key``.
        """
        while True:
            draw(self.render(renderer))
            result = self.handle_key(read_key())
            if result is not None:
                return result
