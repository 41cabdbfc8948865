"""Process-wide runtime path state.

Every value is computed on first access and then kept for the life of the
context. The one exception is the server directory: while the
configuration directory does not exist yet it stays unresolved and is
looked up again on the next request.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from winepaths._log import get_logger
from winepaths.build import BuildConfig, get_build_config
from winepaths.config_dir import ConfigDirLocator, ConfigPaths
from winepaths.launcher import Attempt, BinaryLauncher, execv_attempt
from winepaths.locator import PathResolver, ResolvedPaths

logger = get_logger("context")


class RuntimeContext:
    def __init__(
        self,
        build: BuildConfig | None = None,
        *,
        config_locator: ConfigDirLocator | None = None,
        path_resolver: PathResolver | None = None,
        attempt: Attempt = execv_attempt,
    ) -> None:
        self.build = build if build is not None else get_build_config()
        self._config_locator = (
            config_locator if config_locator is not None else ConfigDirLocator()
        )
        self._path_resolver = (
            path_resolver if path_resolver is not None else PathResolver(self.build)
        )
        self._attempt = attempt
        self._config: ConfigPaths | None = None
        self._server_dir: Path | None = None
        self._paths: ResolvedPaths | None = None

    # -- configuration directory --------------------------------------------

    def _ensure_config(self) -> ConfigPaths:
        if self._config is None:
            self._config = self._config_locator.locate()
            self._server_dir = self._config.server_dir
        return self._config

    @property
    def config_dir(self) -> Path:
        """``$WINEPREFIX`` or ``$HOME/.wine``."""
        return self._ensure_config().config_dir

    @property
    def user_name(self) -> str:
        return self._ensure_config().user_name

    @property
    def server_dir(self) -> Path | None:
        """Directory holding the server socket, ``None`` until the config dir exists."""
        if self._server_dir is None:
            if self._config is None:
                self._ensure_config()
            else:
                self._server_dir = self._config_locator.locate_server_dir(
                    self._config.config_dir
                )
        return self._server_dir

    # -- install / build tree paths -----------------------------------------

    def init_argv0_path(self, argv0: str) -> None:
        if self._paths is not None:
            logger.debug("Paths already resolved, ignoring argv0 %r", argv0)
            return
        self._paths = self._path_resolver.resolve(argv0)

    @property
    def bindir(self) -> Path | None:
        return self._paths.bindir if self._paths is not None else None

    @property
    def dlldir(self) -> Path | None:
        return self._paths.dlldir if self._paths is not None else None

    @property
    def datadir(self) -> Path | None:
        return self._paths.datadir if self._paths is not None else None

    @property
    def build_dir(self) -> Path | None:
        """Root of the build tree when running uninstalled."""
        return self._paths.build_dir if self._paths is not None else None

    @property
    def argv0_name(self) -> str | None:
        return self._paths.argv0_name if self._paths is not None else None

    def get_dlldir(self) -> tuple[Path | None, str, str]:
        """Return ``(dlldir, default_dlldir, dll_prefix)``."""
        return self.dlldir, self.build.dlldir, "/" + self.build.dll_prefix

    @property
    def version(self) -> str:
        return self.build.version

    @property
    def build_id(self) -> str:
        return self.build.build_id

    # -- launching ----------------------------------------------------------

    def launcher(self) -> BinaryLauncher:
        return BinaryLauncher(
            self.build,
            argv0_name=self.argv0_name or "wine",
            bindir=self.bindir,
            build_dir=self.build_dir,
            attempt=self._attempt,
        )

    def exec_binary(self, name: str | None, argv: list[str], env_var: str | None = None) -> None:
        self.launcher().exec_binary(name, argv, env_var)


@lru_cache(maxsize=1)
def get_context() -> RuntimeContext:
    """Return the process-wide :class:`RuntimeContext`."""
    return RuntimeContext()
