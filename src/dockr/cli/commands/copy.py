#!/usr/bin/env python3
"""
Copy command for dockr CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from typing import List, Optional

import typer
from rich.panel import Panel

try:
    from typing import Annotated  # Python 3.9+
except ImportError:
    from typing_extensions import Annotated  # Python 3.8

from dockr.core.errors import (
    DockrError,
    ValidationError,
    create_error_context,
    handle_error,
)
from dockr.orchestration.copy_orchestrator import CopyOrchestrator, CopyRequest

from ..constants import DEFAULT_TIMEOUT, ExitCode
from ..utils import console, setup_logging
from ..validators import load_config


def copy(
    target: Annotated[str, typer.Argument(help="Remote host to copy to")],
    sources: Annotated[
        List[str], typer.Argument(help="Local files or directories to copy")
    ],
    destination: Annotated[
        str,
        typer.Option("--destination", "-d", help="Destination directory on the remote host"),
    ],
    timeout: Annotated[
        int,
        typer.Option(
            "--timeout",
            help="Timeout per source in seconds (-1 for configured default, 0 for no timeout)",
        ),
    ] = DEFAULT_TIMEOUT,
    config_file: Annotated[
        Optional[str],
        typer.Option("--config", help="JSON configuration file"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose logging")
    ] = False,
) -> None:
    """
    📦 Copy build inputs recursively to a remote host.
    """
    setup_logging(verbose)
    config = load_config(config_file, timeout=timeout)

    console.print(
        Panel(
            f"📦 [bold cyan]Copying Files[/bold cyan]\n"
            f"Target: [yellow]{target}[/yellow]\n"
            f"Sources: [yellow]{', '.join(sources)}[/yellow]\n"
            f"Destination: [yellow]{destination}[/yellow]",
            title="Copy Configuration",
            border_style="blue",
        )
    )

    try:
        copied = CopyOrchestrator(ssh_options=config.ssh_options).execute(
            CopyRequest(
                target=target,
                sources=list(sources),
                destination=destination,
                timeout=config.timeout,
            )
        )
        for path in copied:
            console.print(f"✅ [green]{path}[/green]")
        console.print(
            f"🎉 [bold green]Copied {len(copied)} path(s) to {target}[/bold green]"
        )
        raise typer.Exit(ExitCode.SUCCESS)

    except typer.Exit:
        raise
    except ValidationError as e:
        handle_error(e)
        raise typer.Exit(ExitCode.INVALID_ARGS)
    except DockrError as e:
        handle_error(e)
        raise typer.Exit(ExitCode.COPY_FAILURE)
    except KeyboardInterrupt:
        console.print("\n🛑 [yellow]Copy cancelled by user[/yellow]")
        raise typer.Exit(ExitCode.FAILURE)
    except Exception as e:
        console.print(f"💥 [bold red]Unexpected error: {e}[/bold red]")
        handle_error(
            e,
            context=create_error_context(operation="copy", component="copy_command"),
        )
        raise typer.Exit(ExitCode.FAILURE)
