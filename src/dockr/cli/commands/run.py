#!/usr/bin/env python3
"""
Run command for dockr CLI

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
    ConnectionError,
    DockrError,
    NameResolutionError,
    RuntimeError as DockrRuntimeError,
    TimeoutError as DockrTimeoutError,
    ValidationError,
    create_error_context,
    handle_error,
)
from dockr.core.executor import create_executor
from dockr.orchestration.run_orchestrator import RunOrchestrator, RunRequest

from ..constants import DEFAULT_TIMEOUT, NO_TIMEOUT, ExitCode
from ..utils import (
    console,
    display_run_summary,
    save_summary_with_feedback,
    setup_logging,
    split_flag_tokens,
)
from ..validators import load_config, validate_timeout


def run(
    image_name: Annotated[
        str, typer.Argument(help="Image to create the container from, e.g. dockr:1.2.3")
    ],
    workload_arg: Annotated[
        Optional[str],
        typer.Argument(help="Single argument appended after the image"),
    ] = None,
    target: Annotated[
        Optional[str],
        typer.Option(
            "--target", "-T", help="Remote host to run on (default: local runtime)"
        ),
    ] = None,
    flags: Annotated[
        List[str],
        typer.Option(
            "--flag",
            "-F",
            help="Extra create flag token, repeatable and order preserved (e.g. --flag=--rm)",
        ),
    ] = [],
    timeout: Annotated[
        int,
        typer.Option(
            "--timeout",
            help="Timeout for create/inspect in seconds (-1 for configured default, 0 for no timeout)",
        ),
    ] = DEFAULT_TIMEOUT,
    start_timeout: Annotated[
        int,
        typer.Option(
            "--start-timeout",
            help="Timeout for the attached container run in seconds (-1 or 0 to wait until it exits)",
        ),
    ] = NO_TIMEOUT,
    runtime: Annotated[
        Optional[str],
        typer.Option("--runtime", help="Container runtime executable (docker, podman)"),
    ] = None,
    config_file: Annotated[
        Optional[str],
        typer.Option("--config", help="JSON configuration file"),
    ] = None,
    summary_output: Annotated[
        Optional[str],
        typer.Option("--summary-output", "-s", help="Output file for run summary JSON"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose logging")
    ] = False,
) -> None:
    """
    🚀 Create a container, report its name and run it attached.

    The container's exit code becomes this command's exit code.
    """
    setup_logging(verbose)
    validate_timeout(start_timeout, "--start-timeout")
    config = load_config(config_file, runtime=runtime, timeout=timeout)
    runtime_flags = split_flag_tokens(flags)

    console.print(
        Panel(
            f"🚀 [bold cyan]Running Container[/bold cyan]\n"
            f"Image: [yellow]{image_name}[/yellow]\n"
            f"Target: [yellow]{target or 'local'}[/yellow]\n"
            f"Flags: [yellow]{' '.join(runtime_flags) if runtime_flags else 'none'}[/yellow]\n"
            f"Argument: [yellow]{workload_arg if workload_arg is not None else 'none'}[/yellow]",
            title="Run Configuration",
            border_style="green",
        )
    )

    try:
        executor = create_executor(target, config)
        orchestrator = RunOrchestrator(executor, name_template=config.name_template)
        result = orchestrator.execute(
            RunRequest(
                image_name=image_name,
                target=target,
                runtime_flags=runtime_flags,
                workload_arg=workload_arg,
                timeout=config.timeout,
                start_timeout=start_timeout if start_timeout > 0 else None,
            )
        )

        summary = result.to_dict()
        display_run_summary(summary)
        save_summary_with_feedback(summary, summary_output, "Run")

        if result.success:
            console.print(
                f"🎉 [bold green]Container {result.container_name} completed successfully![/bold green]"
            )
            raise typer.Exit(ExitCode.SUCCESS)
        console.print(
            f"💥 [bold red]Container {result.container_name} exited with code {result.exit_code}[/bold red]"
        )
        raise typer.Exit(result.exit_code)

    except typer.Exit:
        raise
    except ValidationError as e:
        handle_error(e)
        raise typer.Exit(ExitCode.INVALID_ARGS)
    except (ConnectionError, DockrRuntimeError, NameResolutionError, DockrTimeoutError) as e:
        handle_error(e)
        raise typer.Exit(ExitCode.RUN_FAILURE)
    except DockrError as e:
        handle_error(e)
        raise typer.Exit(ExitCode.FAILURE)
    except KeyboardInterrupt:
        console.print("\n🛑 [yellow]Run cancelled by user[/yellow]")
        console.print(
            "💡 [dim]A created container may be left behind; list it with 'docker ps -a'[/dim]"
        )
        raise typer.Exit(ExitCode.FAILURE)
    except Exception as e:
        console.print(f"💥 [bold red]Unexpected error: {e}[/bold red]")
        handle_error(
            e,
            context=create_error_context(operation="run", component="run_command"),
        )
        raise typer.Exit(ExitCode.FAILURE)
