from emubox.core.entries import EntrySet
from emubox.core.layout import LayoutMetrics
from emubox.core.menu import MenuKey, MenuState, PaginatedMenu
from emubox.core.renderer import Frame, TextViewportRenderer


def _render(entries, state):
    return TextViewportRenderer().render(entries, LayoutMetrics.for_entries(entries), state)


def test_snapshot_three_entries():
    entries = EntrySet.from_names(["b.cfg", "a.cfg", "c.cfg"])
    frame = _render(entries, MenuState())

    assert (frame.width, frame.height) == (18, 8)
    assert frame.lines() == [
        "┌────────────────┐",
        "│ Select a config│",
        "│────────────────│",
        "│   1. a.cfg     │",
        "│   2. b.cfg     │",
        "│   3. c.cfg     │",
        "│                │",
        "└────────────────┘",
    ]
    assert frame.highlighted_rows() == [3]


def test_highlight_follows_selection():
    entries = EntrySet.from_names(["a", "b", "c"])
    frame = _render(entries, MenuState(selection_index=2))
    assert frame.highlighted_rows() == [5]
    # Label and name are both highlighted, nothing else on the row
    assert frame.highlight_spans() == [(5, 4, 7), (5, 7, 8)]


def test_label_width_changes_at_ten():
    entries = EntrySet.from_names(f"cfg{i:02}" for i in range(15))
    frame = _render(entries, MenuState(selection_index=10, page_start=10, end_of_page=True))
    lines = frame.lines()
    assert lines[3].startswith("│  11. cfg10")
    assert lines[7].startswith("│  15. cfg14")
    # Remaining slots of the last page stay blank
    assert lines[8].strip("│ ") == ""


def test_label_width_changes_at_hundred_and_thousand():
    entries = EntrySet.from_names(f"c{i:04}" for i in range(1005))
    page_90 = _render(entries, MenuState(selection_index=90, page_start=90)).lines()
    assert page_90[11].startswith("│  99. c0098")
    assert page_90[12].startswith("│ 100. c0099")
    page_1000 = _render(entries, MenuState(selection_index=1000, page_start=1000)).lines()
    assert page_1000[3].startswith("│1001. c1000")
    page_990 = _render(entries, MenuState(selection_index=990, page_start=990)).lines()
    assert page_990[12].startswith("│1000. c0999")
    assert page_990[11].startswith("│ 999. c0998")


def test_rendering_is_idempotent():
    entries = EntrySet.from_names(f"cfg{i}" for i in range(23))
    state = MenuState(selection_index=12, page_start=10)
    assert _render(entries, state) == _render(entries, state)


def test_menu_render_uses_current_state():
    menu = PaginatedMenu(EntrySet.from_names(f"cfg{i:02}" for i in range(12)))
    menu.handle_key(MenuKey.RIGHT)
    frame = menu.render(TextViewportRenderer())
    assert isinstance(frame, Frame)
    assert frame.lines()[3].startswith("│  11. cfg10")
    assert frame.highlighted_rows() == [3]
