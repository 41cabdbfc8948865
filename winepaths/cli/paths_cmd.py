"""Paths and candidates commands: show what the resolver and launcher see."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from winepaths.cli._helpers import console, format_path, load_build_config_or_exit

_BuildConfigOption = Annotated[
    Path | None,
    typer.Option("--build-config", help="YAML file with build-time paths and offsets"),
]


def paths(
    argv0: Annotated[
        str | None, typer.Option("--argv0", help="argv[0] to resolve from (default: this program)")
    ] = None,
    build_config: _BuildConfigOption = None,
) -> None:
    """Resolve and print the runtime directories."""
    from winepaths.context import RuntimeContext

    ctx = RuntimeContext(load_build_config_or_exit(build_config))
    ctx.init_argv0_path(argv0 if argv0 is not None else sys.argv[0])

    table = Table(title="Runtime Paths")
    table.add_column("Name", style="cyan")
    table.add_column("Path")

    if ctx.build_dir is not None:
        table.add_row("build dir", str(ctx.build_dir))
    else:
        table.add_row("bindir", format_path(ctx.bindir))
        table.add_row("dlldir", format_path(ctx.dlldir))
        table.add_row("datadir", format_path(ctx.datadir))
    table.add_row("argv0 name", ctx.argv0_name or "")
    table.add_row("user", ctx.user_name)
    table.add_row("config dir", str(ctx.config_dir))
    table.add_row("server dir", format_path(ctx.server_dir, "[yellow]not created yet[/yellow]"))

    console.print(table)


def candidates(
    name: Annotated[str, typer.Argument(help="Binary to look up, e.g. wineserver")],
    env_var: Annotated[
        str | None, typer.Option("--env-var", help="Environment variable holding an explicit path")
    ] = None,
    argv0: Annotated[str | None, typer.Option("--argv0", help="argv[0] to resolve from")] = None,
    build_config: _BuildConfigOption = None,
) -> None:
    """List the paths the launcher would try for NAME, in order."""
    from winepaths.context import RuntimeContext

    ctx = RuntimeContext(load_build_config_or_exit(build_config))
    ctx.init_argv0_path(argv0 if argv0 is not None else sys.argv[0])

    for i, path in enumerate(ctx.launcher().candidates(name, env_var), 1):
        console.print(f"  {i}. {path}", highlight=False)
