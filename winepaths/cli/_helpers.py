"""Shared CLI helpers."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from winepaths.build import BuildConfig, BuildConfigError

console = Console()


def load_build_config_or_exit(path: Path | None) -> BuildConfig:
    from winepaths.build import get_build_config, load_build_config

    try:
        return load_build_config(path) if path is not None else get_build_config()
    except BuildConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None


def format_path(path: Path | None, missing: str = "[dim]not set[/dim]") -> str:
    return str(path) if path is not None else missing
