"""One selection session: scan, menu, re-validation and hand-off to the launcher."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from emubox.common.exceptions import EntryVanished, NoEntries
from emubox.core.entries import EntrySet
from emubox.core.layout import LayoutMetrics
from emubox.core.library import resolve_entry_path
from emubox.core.menu import Cancelled, MenuResult, PaginatedMenu
from emubox.core.scanner import scan_directory
from emubox.logging_cfg import log_call

logger = logging.getLogger(__name__)

# Runs the interactive menu until it closes
MenuDriver = Callable[[PaginatedMenu], MenuResult]
# (config path, language, fullscreen, settings) -> exit status
Launcher = Callable[[Path, Optional[str], bool, bool], int]


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Parameters fixed for the lifetime of a session."""
    config_dir: Path
    language: Optional[str] = None
    fullscreen: bool = False
    settings: bool = False


@dataclass(frozen=True, slots=True)
class MenuSession:
    config: SessionConfig
    entries: EntrySet
    layout: LayoutMetrics


class SelectionStatus(str, enum.Enum):
    LAUNCHED = "launched"
    CANCELLED = "cancelled"
    NO_ENTRIES = "no_entries"
    VANISHED = "vanished"


@dataclass(frozen=True, slots=True)
class SelectionOutcome:
    status: SelectionStatus
    path: Optional[Path] = None
    returncode: Optional[int] = None


def open_session(config: SessionConfig) -> MenuSession:
    """Snapshot the configuration directory.

    Raises:
        DirectoryUnavailable: if the directory cannot be read.
        NoEntries: if it holds no regular files.
    """
    names = scan_directory(config.config_dir)
    if not names:
        raise NoEntries(str(config.config_dir))
    entries = EntrySet.from_names(names)
    return MenuSession(config=config, entries=entries, layout=LayoutMetrics.for_entries(entries))


def resolve_selection(config: SessionConfig, entries: EntrySet, index: int) -> Path:
    """Absolute path of the confirmed entry, checked to still exist."""
    path = resolve_entry_path(config.config_dir, entries[index].name)
    if not path.exists():
        raise EntryVanished(str(path))
    return path


@log_call()
def run_selection(
    config: SessionConfig,
    driver: MenuDriver,
    launcher: Launcher,
    announce: Optional[Callable[[Path], None]] = None,
) -> SelectionOutcome:
    """Run a full session and launch the confirmed configuration.

    Empty directories, cancellation and entries removed behind the menu's
    back end the session normally with the matching status; the launcher is
    only called for a confirmed entry that still exists. Directory and
    overflow errors propagate.
    """
    try:
        session = open_session(config)
    except NoEntries:
        logger.debug("Nothing to select in %s", config.config_dir)
        return SelectionOutcome(SelectionStatus.NO_ENTRIES)

    menu = PaginatedMenu(session.entries, session.layout)
    result = driver(menu)
    if isinstance(result, Cancelled):
        logger.debug("Selection cancelled")
        return SelectionOutcome(SelectionStatus.CANCELLED)

    try:
        path = resolve_selection(config, session.entries, result.index)
    except EntryVanished as e:
        logger.info("%s", e)
        return SelectionOutcome(SelectionStatus.VANISHED, path=Path(e.path))

    if announce is not None:
        announce(path)
    rc = launcher(path, config.language, config.fullscreen, config.settings)
    logger.debug("Emulator exited with status %s", rc)
    return SelectionOutcome(SelectionStatus.LAUNCHED, path=path, returncode=rc)
