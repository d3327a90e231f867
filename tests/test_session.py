from unittest.mock import MagicMock

import pytest

from emubox.common.exceptions import DirectoryUnavailable, EntryOverflow, EntryVanished, NoEntries
from emubox.core.layout import LayoutMetrics
from emubox.core.menu import Cancelled, Confirmed, MenuKey
from emubox.core.session import (
    SelectionStatus,
    SessionConfig,
    open_session,
    resolve_selection,
    run_selection,
)


def _driver(*keys):
    """Menu driver that replays ``keys`` and returns the menu's result."""
    def drive(menu):
        result = None
        for key in keys:
            result = menu.handle_key(key)
        return result
    return drive


def test_open_session_snapshot(config_dir, make_configs):
    make_configs(config_dir, ["b.cfg", "a.cfg", "c.cfg"])
    session = open_session(SessionConfig(config_dir))
    assert session.entries.names == ("a.cfg", "b.cfg", "c.cfg")
    assert session.layout == LayoutMetrics(column_capacity=8, row_width=18)


def test_rescan_gives_same_order(config_dir, make_configs):
    make_configs(config_dir, [f"m{i}.cfg" for i in range(40)])
    first = open_session(SessionConfig(config_dir)).entries
    second = open_session(SessionConfig(config_dir)).entries
    assert first == second


def test_open_session_empty(config_dir):
    with pytest.raises(NoEntries):
        open_session(SessionConfig(config_dir))


def test_open_session_missing_directory(tmp_path):
    with pytest.raises(DirectoryUnavailable):
        open_session(SessionConfig(tmp_path / "missing"))


def test_resolve_selection_absolute(config_dir, make_configs):
    make_configs(config_dir, ["a.cfg"])
    session = open_session(SessionConfig(config_dir))
    path = resolve_selection(session.config, session.entries, 0)
    assert path.is_absolute()
    assert path == config_dir / "a.cfg"


def test_empty_directory_never_opens_menu(config_dir):
    driver = MagicMock()
    launcher = MagicMock()
    outcome = run_selection(SessionConfig(config_dir), driver, launcher)
    assert outcome.status is SelectionStatus.NO_ENTRIES
    driver.assert_not_called()
    launcher.assert_not_called()


def test_confirm_launches_with_pass_through(config_dir, make_configs):
    make_configs(config_dir, [f"cfg{i:02}.cfg" for i in range(15)])
    launcher = MagicMock(return_value=0)
    announced = []
    config = SessionConfig(config_dir, language="en-US", fullscreen=True)

    outcome = run_selection(
        config, _driver(MenuKey.RIGHT, MenuKey.CONFIRM), launcher, announce=announced.append
    )

    expected = config_dir / "cfg10.cfg"
    assert outcome.status is SelectionStatus.LAUNCHED
    assert outcome.path == expected
    assert outcome.returncode == 0
    launcher.assert_called_once_with(expected, "en-US", True, False)
    assert announced == [expected]


def test_settings_mode_passed_to_launcher(config_dir, make_configs):
    make_configs(config_dir, ["a.cfg"])
    launcher = MagicMock(return_value=0)
    run_selection(SessionConfig(config_dir, settings=True), _driver(MenuKey.CONFIRM), launcher)
    launcher.assert_called_once_with(config_dir / "a.cfg", None, False, True)


def test_cancel_has_no_side_effects(config_dir, make_configs):
    make_configs(config_dir, ["a.cfg", "b.cfg"])
    launcher = MagicMock()
    outcome = run_selection(SessionConfig(config_dir), _driver(MenuKey.CANCEL), launcher)
    assert outcome.status is SelectionStatus.CANCELLED
    launcher.assert_not_called()
    assert sorted(p.name for p in config_dir.iterdir()) == ["a.cfg", "b.cfg"]


def test_entry_removed_before_confirmation(config_dir, make_configs):
    make_configs(config_dir, ["a.cfg", "b.cfg"])
    launcher = MagicMock()

    def driver(menu):
        menu.handle_key(MenuKey.DOWN)
        (config_dir / "b.cfg").unlink()
        return menu.handle_key(MenuKey.CONFIRM)

    outcome = run_selection(SessionConfig(config_dir), driver, launcher)

    assert outcome.status is SelectionStatus.VANISHED
    assert outcome.path.name == "b.cfg"
    launcher.assert_not_called()


def test_resolve_selection_raises_when_vanished(config_dir, make_configs):
    make_configs(config_dir, ["a.cfg"])
    session = open_session(SessionConfig(config_dir))
    (config_dir / "a.cfg").unlink()
    with pytest.raises(EntryVanished):
        resolve_selection(session.config, session.entries, 0)


def test_overflow_propagates(config_dir):
    launcher = MagicMock()

    def driver(menu):
        raise EntryOverflow(10000)

    (config_dir / "a.cfg").write_text("")
    with pytest.raises(EntryOverflow):
        run_selection(SessionConfig(config_dir), driver, launcher)
    launcher.assert_not_called()


def test_driver_result_types(config_dir, make_configs):
    make_configs(config_dir, ["a.cfg"])
    seen = []

    def driver(menu):
        seen.append(menu.entry_count)
        return Cancelled()

    run_selection(SessionConfig(config_dir), driver, MagicMock())
    assert seen == [1]
    assert Confirmed(0) != Cancelled()
