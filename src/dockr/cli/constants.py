#!/usr/bin/env python3
"""
Constants and configuration for dockr CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""


# Exit codes
class ExitCode:
    """Exit codes for CLI commands."""

    SUCCESS = 0
    FAILURE = 1
    BUILD_FAILURE = 2
    RUN_FAILURE = 3
    INVALID_ARGS = 4
    COPY_FAILURE = 5


# Default values
DEFAULT_TIMEOUT = -1  # -1 defers to the configured timeout
NO_TIMEOUT = 0
