#!/usr/bin/env python3
"""
Utility functions for dockr CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import json
import logging
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from dockr.core.errors import ErrorHandler, set_error_handler
from .constants import ExitCode


# Initialize Rich console
console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Setup Rich logging configuration and unified error handler."""
    log_level = logging.DEBUG if verbose else logging.INFO

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=verbose,
        markup=True,
        rich_tracebacks=True,
    )

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
        force=True,
    )

    error_handler = ErrorHandler(console=console, verbose=verbose)
    set_error_handler(error_handler)


def split_flag_tokens(flags: List[str]) -> List[str]:
    """Flatten repeated --flag options into one ordered token list.

    Each option value is one token; ``--flag "--name demo"`` is kept as
    a single token so values containing spaces survive.

    Args:
        flags: Values of the repeated --flag option, or None

    Returns:
        Tokens in the order given, empty strings dropped
    """
    if not flags:
        return []
    return [flag for flag in flags if flag != ""]


def save_summary_with_feedback(
    summary: Dict, output_path: Optional[str], summary_type: str
) -> None:
    """Save summary to file with user feedback."""
    if output_path:
        try:
            with open(output_path, "w") as f:
                json.dump(summary, f, indent=2)
            console.print(
                f"💾 {summary_type} summary saved to: [cyan]{output_path}[/cyan]"
            )
        except IOError as e:
            console.print(f"❌ Failed to save {summary_type} summary: [red]{e}[/red]")
            raise typer.Exit(ExitCode.FAILURE)


def display_run_summary(summary: Dict) -> None:
    """Display the outcome of a run as a table."""
    table = Table(title="Run Result", show_header=True, header_style="bold magenta")
    table.add_column("Container", style="cyan")
    table.add_column("Image", style="yellow")
    table.add_column("Target", style="blue")
    table.add_column("Exit Code", justify="right")
    table.add_column("Status", style="bold")

    exit_code = summary.get("exit_code", -1)
    status = "✅ Success" if exit_code == 0 else "❌ Failed"
    table.add_row(
        summary.get("container_name", ""),
        summary.get("image_name", ""),
        summary.get("target", "local"),
        str(exit_code),
        status,
    )
    console.print(table)
