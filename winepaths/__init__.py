"""Runtime path resolution and sibling-binary launching for Wine."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from pathlib import Path


def init_argv0_path(argv0: str) -> None:
    from winepaths.context import get_context

    get_context().init_argv0_path(argv0)


def get_config_dir() -> Path | None:
    from winepaths.context import get_context

    return get_context().config_dir


def get_server_dir() -> Path | None:
    from winepaths.context import get_context

    return get_context().server_dir


def get_user_name() -> str:
    from winepaths.context import get_context

    return get_context().user_name


def get_data_dir() -> Path | None:
    from winepaths.context import get_context

    return get_context().datadir


def get_build_dir() -> Path | None:
    from winepaths.context import get_context

    return get_context().build_dir


def exec_binary(name: str | None, argv: list[str], env_var: str | None = None) -> None:
    from winepaths.context import get_context

    get_context().exec_binary(name, argv, env_var)
