import logging

import pytest


@pytest.fixture(autouse=True)
def _drop_cli_log_handlers():
    """The CLI installs a root console handler bound to the runner's stream."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for h in list(root.handlers):
        if getattr(h, "name", None) == "emubox_console":
            root.removeHandler(h)


@pytest.fixture
def config_dir(tmp_path):
    d = tmp_path / ".emubox"
    d.mkdir()
    return d


@pytest.fixture
def make_configs():
    def _make(directory, names):
        for name in names:
            (directory / name).write_text("")
        return directory

    return _make
