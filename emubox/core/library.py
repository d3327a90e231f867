"""Management of the configuration directory and its files."""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

from emubox.common.exceptions import (
    ConfigAccessError,
    ConfigDirectoryExists,
    ConfigExists,
    ConfigurationError,
    DirectoryUnavailable,
    InvalidConfigName,
    UnknownConfig,
)
from emubox.config import CONFIG_DIR_NAME, CONFIG_EXTENSION, ENV_CONFIG_DIR
from emubox.core.scanner import scan_directory

logger = logging.getLogger(__name__)

_REJECTED_PREFIXES = ("-", "/", "\\")


def default_config_dir() -> Path:
    """Return ``$EMUBOX_DIR`` when set, otherwise ``$HOME/.emubox``."""
    override = os.environ.get(ENV_CONFIG_DIR)
    if override:
        return Path(override).expanduser()
    home = os.environ.get("HOME")
    if not home:
        raise ConfigurationError("$HOME environment variable is not set")
    return Path(home) / CONFIG_DIR_NAME


def is_acceptable_name(name: str) -> bool:
    return bool(name) and not name.startswith(_REJECTED_PREFIXES)


def resolve_entry_path(config_dir: Path, name: str) -> Path:
    """Join ``name`` onto ``config_dir``, refusing anything that leaves it."""
    if not name or name in (".", ".."):
        raise InvalidConfigName(name, "not a file name")
    if "/" in name or os.sep in name or (os.altsep and os.altsep in name):
        raise InvalidConfigName(name, "contains a path separator")
    if "\0" in name:
        raise InvalidConfigName(name, "contains a NUL byte")
    base = Path(config_dir).absolute()
    return base / name


def ensure_directory(config_dir: Path) -> Path:
    config_dir = Path(config_dir)
    if not config_dir.is_dir():
        raise DirectoryUnavailable(str(config_dir), missing=not config_dir.exists())
    return config_dir


def init_directory(config_dir: Path) -> Path:
    """Create the configuration directory (mode 0700)."""
    config_dir = Path(config_dir)
    try:
        config_dir.mkdir(mode=0o700)
    except FileExistsError as e:
        raise ConfigDirectoryExists(str(config_dir)) from e
    except OSError as e:
        missing = e.errno == errno.ENOENT
        raise DirectoryUnavailable(str(config_dir), missing=missing, reason=e.strerror or str(e)) from e
    logger.info("Created config directory %s", config_dir)
    return config_dir


def _with_extension(name: str) -> str:
    # Names already mentioning the extension anywhere are taken as-is
    return name if CONFIG_EXTENSION in name else name + CONFIG_EXTENSION


def create_config(config_dir: Path, name: str) -> Path:
    """Create an empty configuration file, adding the ``.cfg`` extension if missing."""
    ensure_directory(config_dir)
    path = resolve_entry_path(config_dir, _with_extension(name))
    try:
        fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o700)
    except FileExistsError as e:
        raise ConfigExists(path.name) from e
    except OSError as e:
        raise ConfigAccessError(path.name, "create", e.strerror or str(e)) from e
    os.close(fd)
    logger.info("Created %s", path)
    return path


def delete_config(config_dir: Path, name: str) -> Path:
    """Delete one configuration file.

    ``name.cfg`` is preferred when ``name`` lacks the extension and that file
    exists; otherwise ``name`` itself is removed.
    """
    ensure_directory(config_dir)
    path = resolve_entry_path(config_dir, name)
    if CONFIG_EXTENSION not in name:
        candidate = resolve_entry_path(config_dir, name + CONFIG_EXTENSION)
        if candidate.exists():
            path = candidate
    try:
        path.unlink()
    except FileNotFoundError as e:
        raise UnknownConfig(name) from e
    except OSError as e:
        raise ConfigAccessError(path.name, "delete", e.strerror or str(e)) from e
    logger.info("Deleted %s", path)
    return path


def purge_configs(config_dir: Path) -> list[Path]:
    """Delete every regular file in the configuration directory.

    Files that cannot be removed are logged and skipped. Returns the paths
    that were actually deleted.
    """
    deleted: list[Path] = []
    for name in scan_directory(config_dir):
        path = Path(config_dir) / name
        try:
            path.unlink()
        except OSError as e:
            logger.warning("Could not delete %s: %s", path, e.strerror or e)
            continue
        deleted.append(path)
        logger.info("Deleted %s", path)
    return deleted
