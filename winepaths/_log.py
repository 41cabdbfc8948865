"""Logging setup for winepaths.

Modules log through ``get_logger(tag)``, which wires the ``winepaths`` logger
to stderr on first use so library callers get the same output as the CLI.
Debug output is enabled by ``--verbose`` or by setting ``WINEPATHS_DEBUG`` to
a non-empty value other than ``0``.
"""

from __future__ import annotations

import logging
import os
import sys
import threading

_lock = threading.Lock()
_setup_done = False


class _Formatter(logging.Formatter):
    """``wine: [tag] message``, with the ``winepaths.`` prefix dropped from the tag."""

    def format(self, record: logging.LogRecord) -> str:
        tag = record.name.removeprefix("winepaths.")
        return f"wine: [{tag}] {record.getMessage()}"


def debug_requested() -> bool:
    return os.environ.get("WINEPATHS_DEBUG", "") not in ("", "0")


def setup_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the ``winepaths`` logger once.

    Later calls never add a handler; ``verbose=True`` still raises the level
    to debug.
    """
    global _setup_done
    with _lock:
        logger = logging.getLogger("winepaths")
        if _setup_done:
            if verbose:
                logger.setLevel(logging.DEBUG)
            return
        logger.setLevel(logging.DEBUG if verbose or debug_requested() else logging.WARNING)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_Formatter())
        logger.addHandler(handler)
        logger.propagate = False
        _setup_done = True


def get_logger(name: str) -> logging.Logger:
    """Child of the ``winepaths`` logger, set up on first call."""
    setup_logging()
    return logging.getLogger(f"winepaths.{name}")
