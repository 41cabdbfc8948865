"""Typer CLI for winepaths."""

from __future__ import annotations

from typing import Annotated

import typer

from winepaths.cli._helpers import console

app = typer.Typer(
    name="winepaths",
    help="Inspect how the Wine runtime locates its directories and binaries.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        from winepaths import __version__

        console.print(f"winepaths {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """winepaths: runtime path resolution for Wine."""
    from winepaths._log import setup_logging

    setup_logging(verbose=verbose)


@app.command("version")
def version_cmd() -> None:
    """Show the runtime version and build id."""
    from winepaths.cli._helpers import load_build_config_or_exit

    build = load_build_config_or_exit(None)
    console.print(f"{build.version} ({build.build_id})", highlight=False)


from winepaths.cli.paths_cmd import candidates, paths  # noqa: E402

app.command()(paths)
app.command()(candidates)
