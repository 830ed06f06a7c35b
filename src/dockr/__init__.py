"""
dockr - build, copy and run containers on a local or remote container runtime.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

__version__ = "1.2.3"
