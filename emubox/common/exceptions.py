"""Exception hierarchy for emubox.

Every error raised on purpose by the package derives from `EmuboxError`.
Each class carries the process exit code the CLI should use when the error
reaches it.
"""

from __future__ import annotations

import os
from typing import Any, Optional

from ..config import EXIT_EXEC_FAILURE, EXIT_FAILURE, EXIT_OK


# ============================================================================
# BASE EXCEPTIONS
# ============================================================================

class EmuboxError(Exception):
    """Base exception for every emubox error."""

    exit_code: int = EXIT_FAILURE

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


# ============================================================================
# ENVIRONMENT & CONFIGURATION ERRORS
# ============================================================================

class ConfigurationError(EmuboxError):
    """The environment cannot provide a usable configuration."""
    pass


class DirectoryUnavailable(EmuboxError):
    """The configuration directory cannot be opened."""

    def __init__(self, path: str, missing: bool, reason: str = ""):
        if missing:
            msg = "config directory wasn't found"
        else:
            msg = "config directory could not be opened"
            if reason:
                msg += f": {reason}"
        super().__init__(msg, {"path": path})
        self.path = path
        self.missing = missing


class ConfigDirectoryExists(EmuboxError):
    """`init` was asked to create a directory that is already there."""

    def __init__(self, path: str):
        super().__init__("config directory already exists", {"path": path})
        self.path = path


# ============================================================================
# CONFIGURATION FILE ERRORS
# ============================================================================

class ConfigFileError(EmuboxError):
    """Base error for operations on a single configuration file."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


class ConfigExists(ConfigFileError):
    def __init__(self, name: str):
        super().__init__(name, f'file "{name}" already exists')


class UnknownConfig(ConfigFileError):
    def __init__(self, name: str):
        super().__init__(name, f"unknown config file: {name}")


class ConfigAccessError(ConfigFileError):
    """The file system refused an operation on a configuration file."""

    def __init__(self, name: str, action: str, reason: str = ""):
        msg = f"could not {action} {name}"
        if reason:
            msg += f": {reason}"
        super().__init__(name, msg)
        self.action = action


class InvalidConfigName(ConfigFileError):
    def __init__(self, name: str, reason: str = "unexpected character"):
        super().__init__(name, f"invalid config name {name!r}: {reason}")


# ============================================================================
# SELECTION SESSION ERRORS
# ============================================================================

class NoEntries(EmuboxError):
    """The configuration directory holds nothing to select."""

    exit_code = EXIT_OK

    def __init__(self, path: str):
        super().__init__("no configs are available", {"path": path})
        self.path = path


class EntryVanished(EmuboxError):
    """The selected file disappeared between scan and confirmation."""

    def __init__(self, path: str):
        super().__init__(f'config "{os.path.basename(path)}" does not exist')
        self.path = path


class EntryOverflow(EmuboxError):
    """A row number beyond the four-digit label capacity was laid out."""

    def __init__(self, position: int):
        super().__init__("out of range", {"position": position})
        self.position = position


# ============================================================================
# EMULATOR ERRORS
# ============================================================================

class EmulatorNotFound(EmuboxError):
    def __init__(self, path: str):
        super().__init__("could not find 86box binary file", {"path": path})
        self.path = path


class LaunchError(EmuboxError):
    """The emulator binary could not be executed."""

    exit_code = EXIT_EXEC_FAILURE

    def __init__(self, path: str, reason: str = ""):
        msg = f"failed to execute {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.path = path


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def format_exception_chain(exc: Exception) -> str:
    """Format an exception together with its chain of causes."""
    messages = []
    current: Optional[BaseException] = exc
    while current is not None:
        if isinstance(current, EmuboxError):
            messages.append(str(current))
        else:
            messages.append(f"{type(current).__name__}: {current}")
        current = getattr(current, "__cause__", None)

    return " -> ".join(messages)
