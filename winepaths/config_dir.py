"""Per-user configuration directory and per-instance server directory.

The configuration root is ``$WINEPREFIX`` when set, otherwise ``~/.wine``.
It is only validated here: a root that does not exist yet is not an error,
the server directory is simply left unresolved until someone creates it.
"""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from winepaths._log import get_logger
from winepaths.errors import fatal_error, fatal_oserror
from winepaths.identity import server_dir_name

logger = get_logger("config_dir")

CONFIG_DIR_NAME = ".wine"
SERVER_ROOT_PREFIX = "/tmp/.wine"
ANDROID_SERVER_ROOT = ".wineserver"


def _default_getpwuid() -> Callable[[int], Any] | None:
    try:
        import pwd
    except ImportError:
        return None
    return pwd.getpwuid


def strip_trailing_slashes(path: str) -> str:
    """Remove trailing ``/`` characters, keeping a lone root slash."""
    stripped = path.rstrip("/")
    if not stripped and path.startswith("/"):
        return "/"
    return stripped


@dataclass
class ConfigPaths:
    config_dir: Path
    user_name: str
    server_dir: Path | None = None


class ConfigDirLocator:
    """Resolve the user name, configuration root and server directory.

    Every OS facing call is injectable so the checks can be exercised
    against stubbed metadata.
    """

    def __init__(
        self,
        *,
        environ: Mapping[str, str] | None = None,
        stat_fn: Callable[[Path], os.stat_result] | None = None,
        getuid: Callable[[], int] | None = None,
        getpwuid: Callable[[int], Any] | None = None,
        platform: str | None = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._stat = stat_fn if stat_fn is not None else os.stat
        self._getuid = getuid if getuid is not None else getattr(os, "getuid", None)
        self._getpwuid = getpwuid if getpwuid is not None else _default_getpwuid()
        self._platform = platform if platform is not None else sys.platform

    def _uid(self) -> int | None:
        return self._getuid() if self._getuid is not None else None

    def _account(self, uid: int | None) -> Any | None:
        if uid is None or self._getpwuid is None:
            return None
        try:
            return self._getpwuid(uid)
        except KeyError:
            return None

    def server_root(self, config_dir: Path) -> Path:
        """Directory holding the per-instance server directories."""
        if self._platform == "android":
            # no shared /tmp
            return config_dir / ANDROID_SERVER_ROOT
        uid = self._uid()
        if uid is not None:
            return Path(f"{SERVER_ROOT_PREFIX}-{uid}")
        return Path(SERVER_ROOT_PREFIX)

    def _server_dir(self, config_dir: Path, st: os.stat_result) -> Path:
        return self.server_root(config_dir) / server_dir_name(st.st_dev, st.st_ino)

    def locate(self) -> ConfigPaths:
        uid = self._uid()
        account = self._account(uid)

        user = account.pw_name if account is not None else None
        if not user:
            user = self._environ.get("USER")
        if not user:
            fatal_error("cannot determine your user name, set the USER environment variable")

        prefix = self._environ.get("WINEPREFIX")
        if prefix is not None:
            stripped = strip_trailing_slashes(prefix)
            if not os.path.isabs(stripped):
                fatal_error(f"invalid directory {prefix} in WINEPREFIX: not an absolute path")
            # Path drops "." and doubled separators; messages keep the prefix as written
            config_dir = Path(stripped)
            shown = stripped
            open_error = f"cannot open {shown} as specified in WINEPREFIX"
        else:
            home = self._environ.get("HOME")
            if home is None and account is not None:
                home = account.pw_dir
            if home is None:
                fatal_error("could not determine your home directory")
            if not os.path.isabs(home):
                fatal_error(f"your home directory {home} is not an absolute path")
            config_dir = Path(strip_trailing_slashes(home)) / CONFIG_DIR_NAME
            shown = str(config_dir)
            open_error = f"cannot open {shown}"

        try:
            st = self._stat(config_dir)
        except FileNotFoundError:
            logger.debug("Config dir %s does not exist yet", config_dir)
            return ConfigPaths(config_dir=config_dir, user_name=user)
        except OSError as e:
            fatal_oserror(open_error, e)

        if not stat.S_ISDIR(st.st_mode):
            fatal_error(f"{shown} is not a directory")
        if uid is not None and st.st_uid != uid:
            fatal_error(f"{shown} is not owned by you")

        server_dir = self._server_dir(config_dir, st)
        logger.debug("Config dir %s, server dir %s", config_dir, server_dir)
        return ConfigPaths(config_dir=config_dir, user_name=user, server_dir=server_dir)

    def locate_server_dir(self, config_dir: Path) -> Path | None:
        """Retry the server dir for a config dir that was missing earlier.

        Returns ``None`` while *config_dir* still does not exist.
        """
        try:
            st = self._stat(config_dir)
        except FileNotFoundError:
            return None
        except OSError:
            fatal_error(f"cannot stat {config_dir}")
        return self._server_dir(config_dir, st)
