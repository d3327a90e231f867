import subprocess
from pathlib import Path

import pytest

from emubox.common import execution
from emubox.common.exceptions import EmulatorNotFound, LaunchError

CFG = Path("/home/u/.emubox/win98.cfg")


@pytest.mark.parametrize(
    "language, fullscreen, settings, tail",
    [
        ("en-US", True, True, ["-S"]),
        (None, False, True, ["-S"]),
        ("en-US", True, False, ["-G", "en-US", "-F"]),
        ("en-US", False, False, ["-G", "en-US"]),
        (None, True, False, ["-F"]),
        (None, False, False, []),
    ],
)
def test_build_launch_args(language, fullscreen, settings, tail):
    cmd = execution.build_launch_args("86Box", CFG, language, fullscreen, settings)
    assert cmd == ["86Box", "-C", str(CFG)] + tail


def test_launch_waits_and_silences_output(monkeypatch):
    calls = []

    def fake_run(cmd, stdout=None, stderr=None):
        calls.append((cmd, stdout, stderr))
        return subprocess.CompletedProcess(cmd, 3)

    monkeypatch.setattr(subprocess, "run", fake_run)
    rc = execution.launch_emulator("/opt/86Box", CFG, language="de-DE")

    assert rc == 3
    cmd, stdout, stderr = calls[0]
    assert cmd == ["/opt/86Box", "-C", str(CFG), "-G", "de-DE"]
    assert stdout is subprocess.DEVNULL
    assert stderr is subprocess.DEVNULL


def test_launch_exec_failure_maps_to_127(tmp_path):
    with pytest.raises(LaunchError) as excinfo:
        execution.launch_emulator(tmp_path / "not-there", CFG)
    assert excinfo.value.exit_code == 127


def test_launch_real_child(tmp_path):
    script = tmp_path / "fake86box"
    script.write_text("#!/bin/sh\necho noisy\nexit 0\n")
    script.chmod(0o755)
    assert execution.launch_emulator(script, CFG) == 0


class TestFindEmulator:
    def test_explicit_path(self, tmp_path):
        binary = tmp_path / "86Box.AppImage"
        binary.write_text("")
        assert execution.find_emulator(binary) == binary.resolve()

    def test_explicit_path_missing(self, tmp_path):
        with pytest.raises(EmulatorNotFound):
            execution.find_emulator(tmp_path / "missing")

    def test_env_override(self, tmp_path, monkeypatch):
        binary = tmp_path / "box"
        binary.write_text("")
        monkeypatch.setenv("EMUBOX_86BOX", str(binary))
        assert execution.find_emulator() == binary.resolve()

    def test_default_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.delenv("EMUBOX_86BOX", raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "86Box.AppImage").write_text("")
        assert execution.find_emulator() == (tmp_path / "86Box.AppImage").resolve()

    def test_nothing_found(self, tmp_path, monkeypatch):
        monkeypatch.delenv("EMUBOX_86BOX", raising=False)
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(execution.shutil, "which", lambda name: None)
        with pytest.raises(EmulatorNotFound):
            execution.find_emulator()
