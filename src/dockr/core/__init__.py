"""
Core building blocks: console, configuration, executors, runtime commands, errors.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
