"""
Pytest configuration and shared fixtures for dockr tests.

Provides a scripted console double so executors, the runtime command layer
and the orchestrators can be exercised without a container runtime.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import pytest

from dockr.core.config import DockrConfig
from dockr.core.console import CommandResult
from dockr.core.executor import LocalExecutor, RemoteExecutor


# ============================================================================
# Console double
# ============================================================================

class ScriptedConsole:
    """Console double that records argument vectors and replays scripted results.

    Each response is one of:
    - str: successful output
    - (returncode, output): exit status and output
    - Exception: raised from run()
    """

    def __init__(self, responses=None):
        self.calls = []
        self.responses = list(responses or [])

    @property
    def commands(self):
        return [call["args"] for call in self.calls]

    def run(self, args, can_fail=False, timeout=None, live_output=None, prefix="", env=None):
        args = [str(arg) for arg in args]
        self.calls.append(
            {"args": args, "timeout": timeout, "live_output": live_output, "can_fail": can_fail}
        )
        response = self.responses.pop(0) if self.responses else ""
        if isinstance(response, Exception):
            raise response
        if isinstance(response, tuple):
            returncode, output = response
        else:
            returncode, output = 0, response

        result = CommandResult(args=args, returncode=returncode, output=output.strip())
        if not can_fail:
            result.check_returncode()
        return result

    def sh(self, args, can_fail=False, timeout=None, prefix=""):
        return self.run(args, can_fail=can_fail, timeout=timeout).output


@pytest.fixture
def scripted_console():
    """Factory for ScriptedConsole instances."""
    def _make(*responses):
        return ScriptedConsole(responses)
    return _make


@pytest.fixture
def local_executor_factory():
    def _make(console, runtime="docker"):
        return LocalExecutor(console=console, runtime=runtime)
    return _make


@pytest.fixture
def remote_executor_factory():
    def _make(console, host="192.168.0.83", runtime="docker", ssh_options=None):
        return RemoteExecutor(host, console=console, runtime=runtime, ssh_options=ssh_options)
    return _make


@pytest.fixture
def default_config():
    return DockrConfig()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove DOCKR_* variables from the environment."""
    for name in ("DOCKR_CONFIG", "DOCKR_RUNTIME", "DOCKR_TIMEOUT", "DOCKR_SSH_OPTIONS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as fast unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests that spawn real processes"
    )
