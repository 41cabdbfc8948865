"""Tests for the winepaths CLI."""

from __future__ import annotations

from typer.testing import CliRunner

from winepaths import __version__
from winepaths.cli.main import app

runner = CliRunner()


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"winepaths {__version__}" in result.output

    def test_version_command(self, tmp_path, monkeypatch):
        path = tmp_path / "build.yaml"
        path.write_text("version: '9.0'\nbuild_id: wine-9.0-test\n")
        monkeypatch.setenv("WINEPATHS_BUILD_CONFIG", str(path))
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "9.0 (wine-9.0-test)" in result.output

    def test_bad_build_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WINEPATHS_BUILD_CONFIG", str(tmp_path / "missing.yaml"))
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestPaths:
    def test_missing_prefix(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WINEPREFIX", str(tmp_path / "pfx"))
        monkeypatch.setenv("USER", "tester")
        result = runner.invoke(app, ["paths", "--argv0", "wine"])
        assert result.exit_code == 0
        assert "Runtime Paths" in result.output
        assert "server dir" in result.output

    def test_relative_prefix_fails(self, monkeypatch):
        monkeypatch.setenv("WINEPREFIX", "relative/path")
        monkeypatch.setenv("USER", "tester")
        result = runner.invoke(app, ["paths", "--argv0", "wine"])
        assert result.exit_code == 1


class TestCandidates:
    def test_lists_path_entries_in_order(self, monkeypatch):
        monkeypatch.setenv("PATH", "/p1:/p2")
        result = runner.invoke(app, ["candidates", "wineserver", "--argv0", "wine"])
        assert result.exit_code == 0
        assert result.output.index("/p1/wineserver") < result.output.index("/p2/wineserver")

    def test_missing_build_config_file(self, tmp_path):
        result = runner.invoke(
            app, ["candidates", "wine", "--build-config", str(tmp_path / "nope.yaml")]
        )
        assert result.exit_code == 1
