#!/usr/bin/env python3
"""
Build command for dockr CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from typing import Optional

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
from dockr.core.executor import create_executor
from dockr.orchestration.build_orchestrator import BuildOrchestrator, BuildRequest

from ..constants import DEFAULT_TIMEOUT, ExitCode
from ..utils import console, setup_logging
from ..validators import load_config


def build(
    dockerfile: Annotated[str, typer.Argument(help="Path to the Dockerfile")],
    tag: Annotated[str, typer.Argument(help="Image tag, e.g. dockr:1.2.3")],
    context_path: Annotated[str, typer.Argument(help="Build context directory")],
    target: Annotated[
        Optional[str],
        typer.Option(
            "--target",
            "-T",
            help="Remote host to build on; paths are then paths on that host",
        ),
    ] = None,
    no_cache: Annotated[
        bool, typer.Option("--no-cache", help="Rebuild without using the layer cache")
    ] = False,
    timeout: Annotated[
        int,
        typer.Option(
            "--timeout",
            help="Build timeout in seconds (-1 for configured default, 0 for no timeout)",
        ),
    ] = DEFAULT_TIMEOUT,
    runtime: Annotated[
        Optional[str],
        typer.Option("--runtime", help="Container runtime executable (docker, podman)"),
    ] = None,
    config_file: Annotated[
        Optional[str],
        typer.Option("--config", help="JSON configuration file"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose logging")
    ] = False,
) -> None:
    """
    🔨 Build an image from a Dockerfile, locally or on a remote host.
    """
    setup_logging(verbose)
    config = load_config(config_file, runtime=runtime, timeout=timeout)

    console.print(
        Panel(
            f"🔨 [bold cyan]Building Image[/bold cyan]\n"
            f"Dockerfile: [yellow]{dockerfile}[/yellow]\n"
            f"Tag: [yellow]{tag}[/yellow]\n"
            f"Context: [yellow]{context_path}[/yellow]\n"
            f"Target: [yellow]{target or 'local'}[/yellow]",
            title="Build Configuration",
            border_style="blue",
        )
    )

    try:
        executor = create_executor(target, config)
        BuildOrchestrator(executor).execute(
            BuildRequest(
                dockerfile=dockerfile,
                tag=tag,
                context_path=context_path,
                target=target,
                no_cache=no_cache,
                timeout=config.timeout,
            )
        )
        console.print(f"🎉 [bold green]Built {tag} successfully![/bold green]")
        raise typer.Exit(ExitCode.SUCCESS)

    except typer.Exit:
        raise
    except ValidationError as e:
        handle_error(e)
        raise typer.Exit(ExitCode.INVALID_ARGS)
    except DockrError as e:
        # unreachable runtime, timeouts and failed builds all count as build failures
        handle_error(e)
        raise typer.Exit(ExitCode.BUILD_FAILURE)
    except KeyboardInterrupt:
        console.print("\n🛑 [yellow]Build cancelled by user[/yellow]")
        raise typer.Exit(ExitCode.FAILURE)
    except Exception as e:
        console.print(f"💥 [bold red]Unexpected error: {e}[/bold red]")
        handle_error(
            e,
            context=create_error_context(operation="build", component="build_command"),
        )
        raise typer.Exit(ExitCode.FAILURE)
