"""Fatal configuration errors."""

from __future__ import annotations

import sys
from typing import NoReturn

_PREFIX = "wine: "


class FatalError(SystemExit):
    """Unrecoverable condition. Exits with *status* once the diagnostic is printed."""

    def __init__(self, message: str, status: int = 1) -> None:
        self.message = message
        super().__init__(status)

    def __str__(self) -> str:
        return self.message


def print_diagnostic(message: str) -> None:
    print(f"{_PREFIX}{message}", file=sys.stderr, flush=True)


def fatal_error(message: str) -> NoReturn:
    print_diagnostic(message)
    raise FatalError(message)


def fatal_oserror(message: str, exc: OSError) -> NoReturn:
    """Like :func:`fatal_error`, appending the OS error text."""
    reason = exc.strerror or str(exc)
    fatal_error(f"{message}: {reason}")
