#!/usr/bin/env python3
"""Module to run console commands.

This module provides a class to run external commands from an argument
vector, without a shell.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
# built-in modules
import logging
import subprocess
import threading
import typing
from dataclasses import dataclass
# user-defined modules
from dockr.core.errors import ConnectionError, RuntimeError, TimeoutError


logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one external command.

    Attributes:
        args (list): The argument vector that was executed.
        returncode (int): The exit status.
        output (str): The stripped standard output.
        errors (str): The stripped standard error, empty when merged into output.
    """
    args: typing.List[str]
    returncode: int
    output: str
    errors: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def check_returncode(self) -> None:
        """Raise RuntimeError if the exit status is non-zero."""
        if self.success:
            return
        details = self.errors or self.output
        message = f"Command '{format_command(self.args)}' failed with exit code {self.returncode}"
        if details:
            message += f"\n{details}"
        raise RuntimeError(message)


def format_command(args: typing.Sequence[str]) -> str:
    """Render an argument vector for messages and logs."""
    return subprocess.list2cmdline(list(args))


class Console:
    """Class to run console commands.

    Attributes:
        shellVerbose (bool): Print every command before it runs.
        live_output (bool): Relay command output line by line while it runs.
    """
    def __init__(
            self,
            shellVerbose: bool=False,
            live_output: bool=False
        ) -> None:
        """Constructor of the Console class.

        Args:
            shellVerbose (bool): The shell verbose flag.
            live_output (bool): The live output flag.
        """
        self.shellVerbose = shellVerbose
        self.live_output = live_output

    def run(
            self,
            args: typing.Sequence[str],
            can_fail: bool=False,
            timeout: typing.Optional[float]=None,
            live_output: typing.Optional[bool]=None,
            prefix: str="",
            env: typing.Optional[typing.Dict[str, str]]=None
        ) -> CommandResult:
        """Run a command.

        Args:
            args (list): The argument vector; args[0] is the executable.
            can_fail (bool): Return the result instead of raising on non-zero exit.
            timeout (float): The timeout in seconds, None or <= 0 for no timeout.
            live_output (bool): Override the console live output flag.
            prefix (str): The prefix of each relayed output line.
            env (dict): The environment variables.

        Returns:
            CommandResult: The exit status and stripped output.

        Raises:
            ConnectionError: If the executable cannot be found.
            TimeoutError: If the command does not finish in time.
            RuntimeError: If the command fails and can_fail is False.
        """
        args = [str(arg) for arg in args]
        command = format_command(args)
        live = self.live_output if live_output is None else live_output
        if timeout is not None and timeout <= 0:
            timeout = None

        logger.debug("Running: %s", command)
        if self.shellVerbose:
            print("> " + command, flush=True)

        try:
            proc = subprocess.Popen(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if live else subprocess.PIPE,
                universal_newlines=False,
                env=env,
            )
        except FileNotFoundError as exc:
            raise ConnectionError(
                f"Executable not found: {args[0]}",
                cause=exc,
                suggestions=[f"Check that '{args[0]}' is installed and on PATH"],
            ) from exc

        try:
            if not live:
                raw_outs, raw_errs = proc.communicate(timeout=timeout)
                outs = raw_outs.decode("utf-8", errors="replace")
                errs = raw_errs.decode("utf-8", errors="replace")
            else:
                # readline blocks, so the timeout is enforced by killing the process
                timed_out = threading.Event()

                def expire() -> None:
                    timed_out.set()
                    proc.kill()

                watchdog = threading.Timer(timeout, expire) if timeout else None
                if watchdog is not None:
                    watchdog.start()
                lines = []
                try:
                    for raw_line in iter(proc.stdout.readline, b""):
                        line = raw_line.decode("utf-8", errors="replace")
                        print(prefix + line, end="", flush=True)
                        lines.append(line)
                    proc.stdout.close()
                    proc.wait()
                finally:
                    if watchdog is not None:
                        watchdog.cancel()
                if timed_out.is_set():
                    raise subprocess.TimeoutExpired(args, timeout)
                outs = "".join(lines)
                errs = ""
        except subprocess.TimeoutExpired as exc:
            proc.kill()
            proc.wait()
            raise TimeoutError(
                f"Command timed out after {timeout}s: {command}", cause=exc
            ) from exc

        result = CommandResult(
            args=args,
            returncode=proc.returncode,
            output=outs.strip(),
            errors=errs.strip(),
        )
        logger.debug("Exit code %d: %s", proc.returncode, command)

        if not can_fail:
            result.check_returncode()

        return result

    def sh(
            self,
            args: typing.Sequence[str],
            can_fail: bool=False,
            timeout: typing.Optional[float]=None,
            prefix: str=""
        ) -> str:
        """Run a command and return its stripped output."""
        return self.run(args, can_fail=can_fail, timeout=timeout, prefix=prefix).output
