"""Tests for the module-level helpers in ``winepaths``."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import winepaths


def test_helpers_forward_to_process_context(monkeypatch):
    ctx = MagicMock()
    ctx.config_dir = Path("/pfx")
    ctx.server_dir = None
    ctx.user_name = "alice"
    ctx.datadir = Path("/opt/share/wine")
    ctx.build_dir = None
    monkeypatch.setattr("winepaths.context.get_context", lambda: ctx)

    winepaths.init_argv0_path("/opt/bin/wine")
    assert winepaths.get_config_dir() == Path("/pfx")
    assert winepaths.get_server_dir() is None
    assert winepaths.get_user_name() == "alice"
    assert winepaths.get_data_dir() == Path("/opt/share/wine")
    assert winepaths.get_build_dir() is None

    winepaths.exec_binary("wineserver", ["wineserver"], "WINESERVER")

    ctx.init_argv0_path.assert_called_once_with("/opt/bin/wine")
    ctx.exec_binary.assert_called_once_with("wineserver", ["wineserver"], "WINESERVER")
