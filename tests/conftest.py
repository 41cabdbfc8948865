"""Shared test fixtures and helpers."""

from __future__ import annotations

import os
import stat
from types import SimpleNamespace

import pytest

from winepaths.build import get_build_config
from winepaths.context import get_context
from winepaths.launcher import LaunchResult


@pytest.fixture(autouse=True)
def _clear_caches(monkeypatch):
    """Reset process-wide caches and the env vars they read."""
    monkeypatch.delenv("WINEPATHS_BUILD_CONFIG", raising=False)
    get_build_config.cache_clear()
    get_context.cache_clear()
    yield
    get_build_config.cache_clear()
    get_context.cache_clear()


def make_stat(
    *,
    uid: int = 1000,
    dev: int = 0x801,
    ino: int = 42,
    mode: int = stat.S_IFDIR | 0o700,
) -> SimpleNamespace:
    """Minimal stand-in for ``os.stat_result``."""
    return SimpleNamespace(st_mode=mode, st_uid=uid, st_dev=dev, st_ino=ino)


def make_account(name: str = "alice", home: str = "/home/alice") -> SimpleNamespace:
    return SimpleNamespace(pw_name=name, pw_dir=home)


def no_account(uid: int):
    raise KeyError(uid)


class FixedStrategy:
    """Location strategy returning a canned answer and counting calls."""

    def __init__(self, result: str | os.PathLike[str] | None, name: str = "fixed") -> None:
        self.result = os.fspath(result) if result is not None else None
        self.name = name
        self.calls = 0

    def locate(self, argv0: str) -> str | None:
        self.calls += 1
        return self.result


class RecordingAttempt:
    """Launch double: records every attempt, replaces only on *succeed_on*."""

    def __init__(
        self,
        succeed_on: str | None = None,
        failure: LaunchResult = LaunchResult.NOT_FOUND,
    ) -> None:
        self.succeed_on = succeed_on
        self.failure = failure
        self.calls: list[tuple[str, list[str]]] = []

    def __call__(self, path: str, argv: list[str]) -> LaunchResult:
        self.calls.append((path, list(argv)))
        if path == self.succeed_on:
            return LaunchResult.REPLACED
        return self.failure

    @property
    def paths(self) -> list[str]:
        return [p for p, _ in self.calls]
