"""Centralized logging helpers for emubox.

Root-logger configuration shared by the CLI, a JSON formatter carrying a
per-invocation correlation id, and a call-tracing decorator. Keeping this in
one place makes it easy to adjust formatting/verbosity without touching the modules that log.
"""

from __future__ import annotations

import contextvars
import functools
import json
import logging
import os
import sys
import time
import uuid
from typing import Optional

from .config import ENV_LOG_FORMAT

_STD_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


# Correlation ID support for tracing one invocation across modules
_cid_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "emubox_correlation_id", default=None
)


def set_correlation_id(cid: str | None = None) -> str:
    """Set or create and set a correlation id for the current context.

    Returns the correlation id string.
    """
    if cid is None:
        cid = uuid.uuid4().hex
    _cid_var.set(cid)
    return cid


def get_correlation_id() -> str | None:
    return _cid_var.get()


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter that includes correlation id when available."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        cid = get_correlation_id()
        if cid:
            payload["correlation_id"] = cid
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def log_call(level: int = logging.DEBUG):
    """Decorator that logs function entry, duration and exit.

    Usage:
        @log_call()
        def foo(...):
            ...
    """

    def _decorator(func):
        @functools.wraps(func)
        def _wrapper(*args, **kwargs):
            logger = logging.getLogger(func.__module__)
            start = time.time()
            logger.debug("Entering %s; args=%s kwargs=%s", func.__qualname__, args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception:
                duration = (time.time() - start) * 1000.0
                logger.debug(
                    "Exception in %s after %.2fms",
                    func.__qualname__,
                    duration,
                    exc_info=True,
                )
                raise
            duration = (time.time() - start) * 1000.0
            logger.log(
                level,
                "Exited %s; duration_ms=%.2f; return=%s",
                func.__qualname__,
                duration,
                repr(result)[:100],
            )
            return result

        return _wrapper

    return _decorator


def _choose_mode(env: Optional[str]) -> str:
    chosen = env or os.getenv(ENV_LOG_FORMAT, "auto")
    chosen = chosen.lower()
    if chosen in ("json", "human"):
        return chosen
    # auto: prefer human when interactive
    try:
        return "human" if sys.stderr.isatty() else "json"
    except (AttributeError, ValueError):
        return "json"


def configure_logging(env: Optional[str] = None, level: int = logging.WARNING):
    """Configure the root logger.

    env: 'auto' | 'json' | 'human'; defaults to $EMUBOX_LOG_FORMAT or 'auto'.
    - 'auto' chooses human-readable when stderr is a TTY, otherwise JSON.
    - 'json' forces JSON output.
    - 'human' forces a readable formatter.

    Returns the root logger.
    """
    mode = _choose_mode(env)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # One console handler, marked by name so repeated calls stay idempotent
    existing = [
        h for h in root_logger.handlers if getattr(h, "name", None) == "emubox_console"
    ]
    if existing:
        existing[0].setLevel(level)
        return root_logger

    sh = logging.StreamHandler()
    sh.name = "emubox_console"
    sh.setLevel(level)
    if mode == "json":
        sh.setFormatter(JsonFormatter())
    else:
        sh.setFormatter(logging.Formatter(_STD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(sh)

    return root_logger
