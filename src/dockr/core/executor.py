#!/usr/bin/env python3
"""
Command executors.

An executor decides WHERE container runtime commands run: on this machine
or on a remote host reached over ssh. Callers pass runtime arguments
(``["create", "dockr"]``) and never branch on the target themselves.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import shlex
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from dockr.core.config import DockrConfig
from dockr.core.console import CommandResult, Console
from dockr.core.errors import ConnectionError


# ssh reserves exit status 255 for its own connection failures
SSH_CONNECTION_FAILURE = 255


class CommandExecutor(ABC):
    """
    Base class for executors.

    Attributes:
        console: Console used to spawn processes.
        runtime: Container runtime executable.
    """

    def __init__(self, console: Optional[Console] = None, runtime: str = "docker"):
        self.console = console or Console()
        self.runtime = runtime

    @property
    @abstractmethod
    def target(self) -> Optional[str]:
        """Remote host, or None for local execution."""
        pass

    @abstractmethod
    def wrap(self, args: Sequence[str]) -> List[str]:
        """Return the full argument vector for runtime arguments ``args``."""
        pass

    def describe(self) -> str:
        return self.target or "local"

    def run(
        self,
        args: Sequence[str],
        timeout: Optional[float] = None,
        can_fail: bool = False,
    ) -> CommandResult:
        """Run a runtime command and capture its output."""
        return self.console.run(
            self.wrap(args), can_fail=can_fail, timeout=timeout, live_output=False
        )

    def stream(
        self,
        args: Sequence[str],
        timeout: Optional[float] = None,
        prefix: str = "",
    ) -> CommandResult:
        """Run a runtime command, relaying its output as it arrives.

        A non-zero exit status is returned, not raised.
        """
        return self.console.run(
            self.wrap(args),
            can_fail=True,
            timeout=timeout,
            live_output=True,
            prefix=prefix,
        )


class LocalExecutor(CommandExecutor):
    """Runs the container runtime on this machine."""

    @property
    def target(self) -> Optional[str]:
        return None

    def wrap(self, args: Sequence[str]) -> List[str]:
        return [self.runtime, *args]


class RemoteExecutor(CommandExecutor):
    """
    Runs the container runtime on a remote host over ssh.

    ssh joins the remote arguments into one string for the remote shell, so
    each argument is quoted to arrive as the same argument vector.
    """

    def __init__(
        self,
        host: str,
        console: Optional[Console] = None,
        runtime: str = "docker",
        ssh_options: Optional[Sequence[str]] = None,
    ):
        super().__init__(console=console, runtime=runtime)
        if not host or not host.strip():
            raise ValueError("Remote host must be a non-empty string")
        self.host = host.strip()
        self.ssh_options = list(ssh_options or [])

    @property
    def target(self) -> Optional[str]:
        return self.host

    def wrap(self, args: Sequence[str]) -> List[str]:
        remote_command = " ".join(shlex.quote(str(arg)) for arg in [self.runtime, *args])
        return [
            "ssh",
            "-o",
            "BatchMode=yes",
            *self.ssh_options,
            self.host,
            "--",
            remote_command,
        ]

    def run(
        self,
        args: Sequence[str],
        timeout: Optional[float] = None,
        can_fail: bool = False,
    ) -> CommandResult:
        result = super().run(args, timeout=timeout, can_fail=True)
        if result.returncode == SSH_CONNECTION_FAILURE:
            raise self._unreachable(result.errors or result.output)
        if not can_fail:
            result.check_returncode()
        return result

    def stream(
        self,
        args: Sequence[str],
        timeout: Optional[float] = None,
        prefix: str = "",
    ) -> CommandResult:
        result = super().stream(args, timeout=timeout, prefix=prefix)
        if result.returncode == SSH_CONNECTION_FAILURE:
            raise self._unreachable(result.output)
        return result

    def _unreachable(self, details: str) -> ConnectionError:
        message = f"Remote host {self.host} is unreachable"
        if details:
            message += f"\n{details}"
        return ConnectionError(
            message,
            suggestions=[
                f"Check that 'ssh {self.host}' works without a password prompt",
                f"Check that {self.runtime} is installed on {self.host}",
            ],
        )


def create_executor(
    target: Optional[str] = None,
    config: Optional[DockrConfig] = None,
    console: Optional[Console] = None,
) -> CommandExecutor:
    """Select the executor for an execution target; None means local."""
    config = config or DockrConfig()
    if target:
        return RemoteExecutor(
            target,
            console=console,
            runtime=config.runtime,
            ssh_options=config.ssh_options,
        )
    return LocalExecutor(console=console, runtime=config.runtime)
