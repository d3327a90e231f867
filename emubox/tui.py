"""Terminal front-end for the selection menu.

A small Textual application that paints the frames produced by a
`ViewportRenderer` and feeds key presses to a `PaginatedMenu`. All
navigation rules live in the menu; this module only translates keys and
draws.
"""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.widgets import Static

from .common.exceptions import EntryOverflow
from .core.menu import Cancelled, MenuKey, MenuResult, PaginatedMenu
from .core.renderer import Frame, TextViewportRenderer, ViewportRenderer

# Textual key names -> menu keys. Enter may arrive as ctrl+m / ctrl+j
# depending on the terminal.
KEY_MAP: dict[str, MenuKey] = {
    "up": MenuKey.UP,
    "down": MenuKey.DOWN,
    "left": MenuKey.LEFT,
    "right": MenuKey.RIGHT,
    "enter": MenuKey.CONFIRM,
    "ctrl+m": MenuKey.CONFIRM,
    "ctrl+j": MenuKey.CONFIRM,
    "backspace": MenuKey.CANCEL,
    "ctrl+h": MenuKey.CANCEL,
}


def translate_key(key: str | None) -> MenuKey:
    if not key:
        return MenuKey.OTHER
    return KEY_MAP.get(str(key).strip().lower(), MenuKey.OTHER)


def frame_to_text(frame: Frame) -> Text:
    """Turn a frame into rich Text, highlighted cells in reverse video."""
    text = Text("\n".join(frame.lines()), no_wrap=True)
    stride = frame.width + 1
    for row, start, end in frame.highlight_spans():
        text.stylize("reverse", row * stride + start, row * stride + end)
    return text


class MenuApp(App):
    """Fullscreen host for one PaginatedMenu session."""

    CSS = """
    #viewport {
        width: auto;
        height: auto;
    }
    """

    def __init__(self, menu: PaginatedMenu, renderer: Optional[ViewportRenderer] = None) -> None:
        super().__init__()
        self.menu = menu
        self.renderer = renderer or TextViewportRenderer()
        self.error: Optional[EntryOverflow] = None

    def compose(self) -> ComposeResult:  # type: ignore[override]
        yield Static(id="viewport")

    def on_mount(self) -> None:
        self._redraw()

    def _abort(self, exc: EntryOverflow) -> None:
        self.error = exc
        self.exit(None)

    def _redraw(self) -> None:
        try:
            frame = self.menu.render(self.renderer)
        except EntryOverflow as exc:
            self._abort(exc)
            return
        self.query_one("#viewport", Static).update(frame_to_text(frame))

    def on_key(self, event) -> None:  # type: ignore[override]
        key = translate_key(getattr(event, "key", None))
        if key is MenuKey.OTHER:
            return
        event.stop()
        try:
            result = self.menu.handle_key(key)
        except EntryOverflow as exc:
            self._abort(exc)
            return
        if result is not None:
            self.exit(result)
            return
        self._redraw()


def run_menu_app(menu: PaginatedMenu, renderer: Optional[ViewportRenderer] = None) -> MenuResult:
    """Run the menu in the terminal and return its result.

    Quitting the app any other way counts as a cancellation.

    Raises:
        EntryOverflow: if a page beyond the numbering capacity was reached.
    """
    app = MenuApp(menu, renderer)
    result = app.run()
    if app.error is not None:
        raise app.error
    return result if result is not None else Cancelled()
