#!/usr/bin/env python3
"""
Validation functions for dockr CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from typing import Optional

import typer

from dockr.core.config import ConfigLoader, DockrConfig
from dockr.core.errors import ConfigurationError
from .constants import DEFAULT_TIMEOUT, ExitCode
from .utils import console


def validate_timeout(timeout: int, option: str = "--timeout") -> None:
    """
    Reject timeouts below -1.

    Raises:
        typer.Exit: If validation fails
    """
    if timeout < DEFAULT_TIMEOUT:
        console.print(
            f"❌ [red]{option} must be -1 (configured default), 0 (no timeout) or a positive integer[/red]"
        )
        raise typer.Exit(ExitCode.INVALID_ARGS)


def load_config(
    config_file: Optional[str],
    runtime: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> DockrConfig:
    """
    Resolve configuration from file, environment and CLI options.

    Args:
        config_file: Optional JSON config file
        runtime: --runtime value, None to keep lower layers
        timeout: --timeout value, -1 to keep lower layers

    Returns:
        The effective DockrConfig

    Raises:
        typer.Exit: If the configuration is invalid
    """
    validate_timeout(timeout)
    overrides = {
        "runtime": runtime,
        "timeout": None if timeout == DEFAULT_TIMEOUT else timeout,
    }
    try:
        return ConfigLoader.load_config(config_file=config_file, overrides=overrides)
    except ConfigurationError as e:
        console.print(f"⚙️  [bold red]Configuration error: {e}[/bold red]")
        for suggestion in e.suggestions:
            console.print(f"  • {suggestion}")
        raise typer.Exit(ExitCode.INVALID_ARGS)
