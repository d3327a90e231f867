import logging
import os
import shlex
import shutil
import subprocess
import uuid
from pathlib import Path
from typing import List, Optional

from ..config import DEFAULT_EMULATOR, EMULATOR_FALLBACK_NAMES, ENV_EMULATOR
from .exceptions import EmulatorNotFound, LaunchError

logger = logging.getLogger(__name__)


def find_tool(name: str) -> Optional[Path]:
    """Find an executable in the system PATH or in the current directory.

    Args:
        name: The name of the executable to find.

    Returns:
        Optional[Path]: The path to the executable if found, None otherwise.
    """
    p = shutil.which(name)
    if p:
        return Path(p).resolve()

    local = Path(f"./{name}").resolve()
    if local.exists():
        return local

    return None


def find_emulator(path: Optional[Path | str] = None) -> Path:
    """Locate the 86Box binary.

    Lookup order: the explicit ``path``, ``$EMUBOX_86BOX``, the default
    ``./86Box.AppImage``, then ``86Box`` on PATH.

    Raises:
        EmulatorNotFound: when the explicit or configured path does not
            exist, or nothing was found at all.
    """
    explicit = path or os.environ.get(ENV_EMULATOR)
    if explicit:
        p = Path(explicit).expanduser()
        if not p.exists():
            raise EmulatorNotFound(str(p))
        return p.resolve()

    default = Path(DEFAULT_EMULATOR)
    if default.exists():
        return default.resolve()

    for name in EMULATOR_FALLBACK_NAMES:
        found = find_tool(name)
        if found:
            return found

    raise EmulatorNotFound(DEFAULT_EMULATOR)


def build_launch_args(
    binary: Path | str,
    config_path: Path | str,
    language: Optional[str] = None,
    fullscreen: bool = False,
    settings: bool = False,
) -> List[str]:
    """Build the 86Box command line.

    Settings mode opens the configuration window and ignores the language
    and fullscreen options.
    """
    cmd = [str(binary), "-C", str(config_path)]
    if settings:
        cmd.append("-S")
        return cmd
    if language:
        cmd.extend(["-G", language])
    if fullscreen:
        cmd.append("-F")
    return cmd


def launch_emulator(
    binary: Path | str,
    config_path: Path | str,
    language: Optional[str] = None,
    fullscreen: bool = False,
    settings: bool = False,
) -> int:
    """Run 86Box against ``config_path`` and wait for it to exit.

    The child's stdout/stderr go to /dev/null so they never draw over the
    terminal. Returns the child's exit status.

    Raises:
        LaunchError: if the binary cannot be executed.
    """
    cmd = build_launch_args(binary, config_path, language, fullscreen, settings)

    operation_id = uuid.uuid4().hex
    adapter = logging.LoggerAdapter(logger, {"operation_id": operation_id})
    adapter.debug("launch start: %s", shlex.join(cmd))

    try:
        res = subprocess.run(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise LaunchError(str(binary), e.strerror or str(e)) from e

    adapter.debug("launch finished: rc=%s", res.returncode)
    return res.returncode
