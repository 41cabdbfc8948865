"""Locate the runtime's binary, dll and data directories, or its build tree.

Three "where am I" strategies are tried in a fixed priority order:

1. the running executable, through the platform's self link
2. the file that holds this resolution code
3. the directory part of ``argv[0]``

A candidate binary directory is accepted only when it contains
``wineserver``. Otherwise the resolver checks whether it sits inside an
uninstalled build tree, in which case the build root wins and no install
directories are set.

Candidates are kept as the raw strings the strategies produced until the
result is built: ``.`` components count as path components when walking
up to a build root.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from winepaths._log import get_logger
from winepaths.build import BuildConfig

logger = get_logger("locator")

SERVER_BINARY = "wineserver"
BUILD_MARKERS = ("server/wineserver", "dlls/ntdll/ntdll.dll.so")
LOADER_DIR = "loader"


def _exe_link(platform: str) -> str | None:
    if platform.startswith("linux") or platform.startswith("gnukfreebsd"):
        return "/proc/self/exe"
    if platform.startswith("freebsd") or platform.startswith("dragonfly"):
        return "/proc/curproc/file"
    return None


def build_path(directory: str | os.PathLike[str], name: str) -> str:
    """Join with exactly one separator between *directory* and *name*."""
    directory = os.fspath(directory)
    if directory and not directory.endswith("/"):
        directory += "/"
    return directory + name


def _dirname(path: str) -> str | None:
    """Strip the last component of *path*; ``None`` when it has no separator."""
    idx = path.rfind("/")
    if idx < 0:
        return None
    return path[:idx] or "/"


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def _strip_component(path: str) -> str | None:
    """Drop the last component and its separators.

    Returns ``None`` instead of reaching ``/`` or an empty relative path.
    """
    end = len(path) - 1
    while end > 0 and path[end] == "/":
        end -= 1
    while end > 0 and path[end] != "/":
        end -= 1
    if end <= 0:
        return None
    return path[:end]


class LocationStrategy(Protocol):
    name: str

    def locate(self, argv0: str) -> str | None: ...


class SelfExeStrategy:
    """Directory of the running executable, read from the process self link.

    Platforms without a self link (anything but Linux and the BSDs listed in
    :func:`_exe_link`) always yield ``None``.
    """

    name = "self-exe"

    def __init__(
        self,
        link: str | None = None,
        *,
        platform: str | None = None,
        readlink: Callable[[str], str] = os.readlink,
    ) -> None:
        if link is None:
            link = _exe_link(platform if platform is not None else sys.platform)
        self._link = link
        self._readlink = readlink

    def locate(self, argv0: str) -> str | None:
        if self._link is None:
            return None
        try:
            target = self._readlink(self._link)
        except OSError:
            return None
        return _dirname(target)


class SharedLibraryStrategy:
    """Directory of the file holding this resolution code."""

    name = "shared-library"

    def __init__(self, module_file: str | None = None) -> None:
        self._module_file = module_file if module_file is not None else __file__

    def locate(self, argv0: str) -> str | None:
        if not self._module_file.startswith("/"):
            return None
        return _dirname(self._module_file)


class Argv0Strategy:
    """Directory part of ``argv[0]``, made absolute against the working directory.

    A bare program name carries no location and yields ``None``. A relative
    directory is appended to the working directory as written, so
    ``./wine`` run from ``/src`` gives ``/src/.``.
    """

    name = "argv0"

    def __init__(self, *, getcwd: Callable[[], str] = os.getcwd) -> None:
        self._getcwd = getcwd

    def locate(self, argv0: str) -> str | None:
        head = _dirname(argv0)
        if head is None:
            return None
        if argv0.startswith("/"):
            return head
        try:
            cwd = self._getcwd()
        except OSError:
            return None
        return f"{cwd}/{head}"


@dataclass(frozen=True)
class ResolvedPaths:
    argv0_name: str
    bindir: Path | None = None
    dlldir: Path | None = None
    datadir: Path | None = None
    build_dir: Path | None = None


class PathResolver:
    def __init__(
        self,
        build: BuildConfig,
        *,
        self_exe: LocationStrategy | None = None,
        shared_library: LocationStrategy | None = None,
        argv0: LocationStrategy | None = None,
        exists: Callable[[str], bool] = os.path.exists,
    ) -> None:
        self._build = build
        self._self_exe = self_exe if self_exe is not None else SelfExeStrategy()
        self._shared_library = (
            shared_library if shared_library is not None else SharedLibraryStrategy()
        )
        self._argv0 = argv0 if argv0 is not None else Argv0Strategy()
        self._exists = exists

    def is_valid_bindir(self, bindir: str) -> bool:
        return self._exists(build_path(bindir, SERVER_BINARY))

    def _is_build_dir(self, basedir: str) -> bool:
        return all(self._exists(f"{basedir}/{marker}") for marker in BUILD_MARKERS)

    def find_build_dir(self, basedir: str | os.PathLike[str]) -> str | None:
        """Return the build root one or two levels above *basedir*, if any."""
        candidate = _strip_component(os.fspath(basedir))
        for _ in range(2):
            if candidate is None:
                return None
            if self._is_build_dir(candidate):
                return candidate
            candidate = _strip_component(candidate)
        return None

    def _bindir_or_build_dir(self, candidate: str | None) -> tuple[str | None, str | None]:
        if candidate is None or self.is_valid_bindir(candidate):
            return candidate, None
        return None, self.find_build_dir(candidate)

    def resolve(self, argv0: str) -> ResolvedPaths:
        basename = _basename(argv0)

        bindir, build_dir = self._bindir_or_build_dir(self._self_exe.locate(argv0))
        if bindir is not None or build_dir is not None:
            logger.debug("%s: bindir=%s build_dir=%s", self._self_exe.name, bindir, build_dir)

        libdir = self._shared_library.locate(argv0)
        if libdir is not None and bindir is None and build_dir is None:
            build_dir = self.find_build_dir(libdir)
            if build_dir is None:
                bindir = build_path(libdir, self._build.lib_to_bindir)
            logger.debug("%s: libdir=%s", self._shared_library.name, libdir)

        if libdir is None and bindir is None and build_dir is None:
            bindir, build_dir = self._bindir_or_build_dir(self._argv0.locate(argv0))
            logger.debug("%s: bindir=%s build_dir=%s", self._argv0.name, bindir, build_dir)

        if build_dir is not None:
            logger.debug("Running from build tree %s", build_dir)
            return ResolvedPaths(argv0_name=f"{LOADER_DIR}/{basename}", build_dir=Path(build_dir))

        dlldir = None
        if libdir is not None:
            dlldir = Path(build_path(libdir, self._build.lib_to_dlldir))
        elif bindir is not None:
            dlldir = Path(build_path(bindir, self._build.bin_to_dlldir))
        datadir = None
        if bindir is not None:
            datadir = Path(build_path(bindir, self._build.bin_to_datadir))

        return ResolvedPaths(
            argv0_name=basename,
            bindir=Path(bindir) if bindir is not None else None,
            dlldir=dlldir,
            datadir=datadir,
        )
