#!/usr/bin/env python3
"""
CLI Commands Package for dockr

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from .build import build
from .copy import copy
from .run import run

__all__ = ["build", "copy", "run"]
