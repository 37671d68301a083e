# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Logging for the ``padexp`` hierarchy.

Modules call :func:`get_logger` with ``__name__``; the first call installs a
stderr handler on the ``padexp`` root.  The CLI calls :func:`configure` again
with the Hydra ``log_level`` / ``log_file`` values.  Without arguments the
level and file come from ``PADEXP_LOG_LEVEL`` (default INFO) and
``PADEXP_LOG_FILE``.
"""

import logging
import os
import sys
from typing import Optional

ROOT = "padexp"

_LEVEL_COLORS = {
    "DEBUG": "36",
    "INFO": "32",
    "WARNING": "33",
    "ERROR": "31",
    "CRITICAL": "35",
}


class _ColorFormatter(logging.Formatter):
    """Colours the level name; the record itself is left untouched."""

    def format(self, record: logging.LogRecord) -> str:
        code = _LEVEL_COLORS.get(record.levelname)
        if code is None:
            return super().format(record)
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"\033[{code}m{record.levelname}\033[0m"
        return super().format(tinted)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    fmt = "%(levelname)s %(name)s: %(message)s"
    if getattr(sys.stderr, "isatty", lambda: False)():
        handler.setFormatter(_ColorFormatter(fmt))
    else:
        handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """(Re)configure the ``padexp`` root logger.

    Replaces any handlers installed by a previous call, so calling it twice
    never duplicates output.

    Args:
        level (str, optional): Level name. Defaults to ``PADEXP_LOG_LEVEL``
            or INFO; unknown names fall back to INFO.
        log_file (str, optional): Path appended to in plain text. Defaults
            to ``PADEXP_LOG_FILE``; no file handler when unset.

    Returns:
        The ``padexp`` root logger.
    """
    root = logging.getLogger(ROOT)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    level = (level or os.environ.get("PADEXP_LOG_LEVEL", "INFO")).upper()
    root.setLevel(getattr(logging, level, logging.INFO))
    root.addHandler(_console_handler())

    log_file = log_file or os.environ.get("PADEXP_LOG_FILE")
    if log_file:
        fh = logging.FileHandler(log_file, mode="a")
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(fh)
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger named ``padexp.<name>``; configures the root on first use."""
    if not logging.getLogger(ROOT).handlers:
        configure()
    return logging.getLogger(f"{ROOT}.{name}")
