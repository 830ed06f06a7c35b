#!/usr/bin/env python3
"""
CLI Package for dockr

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from .app import app, cli_main
from .constants import ExitCode, DEFAULT_TIMEOUT, NO_TIMEOUT
from .utils import (
    setup_logging,
    split_flag_tokens,
    save_summary_with_feedback,
    display_run_summary,
)
from .validators import load_config, validate_timeout

__all__ = [
    "app",
    "cli_main",
    "ExitCode",
    "DEFAULT_TIMEOUT",
    "NO_TIMEOUT",
    "setup_logging",
    "split_flag_tokens",
    "save_summary_with_feedback",
    "display_run_summary",
    "load_config",
    "validate_timeout",
]
