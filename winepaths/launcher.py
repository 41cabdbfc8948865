"""Launch sibling binaries of the runtime by replacing the current process.

Candidates are tried in order: the build tree, the resolved bindir, a
caller-named environment override, every ``PATH`` entry and finally the
build-time bindir. Only a successful ``execv`` ends the search; any other
outcome moves on to the next candidate.
"""

from __future__ import annotations

import errno
import os
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path

from winepaths._log import get_logger
from winepaths.build import BuildConfig
from winepaths.errors import FatalError, print_diagnostic
from winepaths.locator import SERVER_BINARY, build_path

logger = get_logger("launcher")

PRELOADER = "wine-preloader"
PRELOADER64 = "wine64-preloader"


class LaunchResult(Enum):
    REPLACED = "replaced"
    NOT_FOUND = "not-found"
    NOT_EXECUTABLE = "not-executable"
    OTHER_ERROR = "other-error"


_EXIT_STATUS: dict[LaunchResult, int] = {
    LaunchResult.NOT_FOUND: 127,
    LaunchResult.NOT_EXECUTABLE: 126,
    LaunchResult.OTHER_ERROR: 1,
}

_REASONS: dict[LaunchResult, str] = {
    LaunchResult.NOT_FOUND: "file not found",
    LaunchResult.NOT_EXECUTABLE: "not executable",
    LaunchResult.OTHER_ERROR: "exec failed",
}

Attempt = Callable[[str, list[str]], LaunchResult]


class LaunchExhausted(FatalError):
    """Every candidate failed; the exit status reflects the last failure."""

    def __init__(self, name: str, last: LaunchResult) -> None:
        self.name = name
        self.last = last
        super().__init__(f"could not exec {name}: {_REASONS[last]}", _EXIT_STATUS[last])


def classify_exec_error(exc: OSError) -> LaunchResult:
    if exc.errno in (errno.ENOENT, errno.ENOTDIR):
        return LaunchResult.NOT_FOUND
    if exc.errno in (errno.EACCES, errno.ENOEXEC, errno.EPERM):
        return LaunchResult.NOT_EXECUTABLE
    return LaunchResult.OTHER_ERROR


def execv_attempt(path: str, argv: list[str]) -> LaunchResult:
    """Replace the process image; only returns when ``execv`` fails."""
    try:
        os.execv(path, argv)
    except OSError as e:
        return classify_exec_error(e)
    return LaunchResult.REPLACED


def preloader_path(target: str) -> str:
    """Preloader sitting next to *target*, 64-bit flavour for ``*64`` targets."""
    head = target[: target.rfind("/") + 1]
    base = target[len(head) :]
    return head + (PRELOADER64 if base.endswith("64") else PRELOADER)


class BinaryLauncher:
    """Search-and-exec for one snapshot of the resolved runtime paths.

    Nothing is cached: each :meth:`exec_binary` call rebuilds the
    candidate list from the environment.
    """

    def __init__(
        self,
        build: BuildConfig,
        *,
        argv0_name: str,
        bindir: Path | None = None,
        build_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
        attempt: Attempt = execv_attempt,
        use_preloader: bool | None = None,
    ) -> None:
        self._build = build
        self._argv0_name = argv0_name
        self._bindir = bindir
        self._build_dir = build_dir
        self._environ = os.environ if environ is None else environ
        self._attempt = attempt
        self._use_preloader = (
            build.preloader_enabled() if use_preloader is None else use_preloader
        )

    def candidates(self, name: str | None, env_var: str | None = None) -> list[str]:
        """Ordered full paths that :meth:`exec_binary` would try for *name*."""
        if name is None:
            name = self._argv0_name
        paths: list[str] = []

        if "/" in name:
            if self._build_dir is not None:
                paths.append(build_path(self._build_dir, name))
            name = name.rsplit("/", 1)[1]

        if self._bindir is not None:
            paths.append(build_path(self._bindir, name))

        if env_var:
            override = self._environ.get(env_var)
            if override:
                paths.append(override)

        search = self._environ.get("PATH")
        if search:
            for entry in search.split(os.pathsep):
                if entry:
                    paths.append(f"{entry}/{name}")

        paths.append(build_path(self._build.bindir, name))
        return paths

    def _try(self, target: str, argv: list[str], use_preloader: bool) -> LaunchResult:
        if use_preloader:
            preloader = preloader_path(target)
            logger.debug("Trying %s via %s", target, preloader)
            if self._attempt(preloader, [preloader, target, *argv[1:]]) is LaunchResult.REPLACED:
                return LaunchResult.REPLACED
        logger.debug("Trying %s", target)
        return self._attempt(target, [target, *argv[1:]])

    def exec_binary(
        self,
        name: str | None,
        argv: list[str],
        env_var: str | None = None,
    ) -> None:
        """Exec *name* (the default loader when ``None``) with *argv*.

        ``argv[0]`` is replaced by each candidate path. Raises
        :class:`LaunchExhausted` when no candidate could be executed.
        """
        if name is None:
            name = self._argv0_name
        use_preloader = self._use_preloader and not name.endswith(SERVER_BINARY)

        last = LaunchResult.NOT_FOUND
        for target in self.candidates(name, env_var):
            last = self._try(target, argv, use_preloader)
            if last is LaunchResult.REPLACED:
                return

        error = LaunchExhausted(name.rsplit("/", 1)[-1], last)
        print_diagnostic(error.message)
        raise error
