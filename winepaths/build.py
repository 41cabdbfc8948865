"""Build-time constants: install directories and the fixed relative offsets.

Values are handed to the resolver, never discovered. A packager can replace
the defaults by pointing ``WINEPATHS_BUILD_CONFIG`` at a YAML mapping with
any subset of the fields below.
"""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from winepaths import __version__


class BuildConfigError(Exception):
    """Raised when a build config file cannot be loaded or validated."""


class BuildConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    bindir: str = "/usr/local/bin"
    dlldir: str = "/usr/local/lib/wine"
    dll_prefix: str = ""
    lib_to_bindir: str = "../bin"
    lib_to_dlldir: str = "wine"
    bin_to_dlldir: str = "../lib/wine"
    bin_to_datadir: str = "../share/wine"
    version: str = __version__
    build_id: str = f"winepaths-{__version__}"
    use_preloader: bool | None = None

    def preloader_enabled(self) -> bool:
        if self.use_preloader is not None:
            return self.use_preloader
        return sys.platform.startswith("linux")


def load_build_config(path: Path) -> BuildConfig:
    from winepaths._yaml import load_yaml_model

    return load_yaml_model(path, BuildConfig, BuildConfigError)


@lru_cache(maxsize=1)
def get_build_config() -> BuildConfig:
    """Return the build constants, from ``WINEPATHS_BUILD_CONFIG`` if set."""
    env = os.environ.get("WINEPATHS_BUILD_CONFIG")
    if env:
        return load_build_config(Path(env))
    return BuildConfig()
