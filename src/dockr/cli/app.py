#!/usr/bin/env python3
"""
Typer app for the dockr command line.

Wires the build, copy and run commands under one `dockr` entry point.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import sys

import typer
from rich.traceback import install

try:
    from typing import Annotated  # Python 3.9+
except ImportError:
    from typing_extensions import Annotated  # Python 3.8

from dockr import __version__
from .commands import build, copy, run
from .constants import ExitCode
from .utils import console

install(show_locals=False)

app = typer.Typer(
    name="dockr",
    help="🐳 Container lifecycle helper: build images, ship build inputs and run containers attached",
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=True,
)

app.command()(build)
app.command()(copy)
app.command()(run)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """
    🐳 build and run use the local runtime unless --target HOST is given;
    copy always sends files to a host.
    """
    if version:
        console.print(
            f"🐳 [bold cyan]dockr[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit()


def cli_main() -> None:
    """Console script entry; turns stray interrupts and crashes into exit codes."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n🛑 [yellow]Operation cancelled by user[/yellow]")
        sys.exit(ExitCode.FAILURE)
    except Exception as e:
        console.print(f"💥 [bold red]Unexpected error: {e}[/bold red]")
        console.print_exception()
        sys.exit(ExitCode.FAILURE)


if __name__ == "__main__":
    cli_main()
