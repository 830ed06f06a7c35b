#!/usr/bin/env python3
"""
Run Orchestrator - Coordinates the container lifecycle.

create -> inspect (resolve name) -> report -> start attached

The target (local or remote) and the optional runtime flags and workload
argument only change the argument vectors; there is one code path.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypeVar

from rich.console import Console as RichConsole

from dockr.core.docker import Docker
from dockr.core.errors import DockrError, ValidationError, create_error_context
from dockr.core.executor import CommandExecutor


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RunRequest:
    """What to run and where.

    Attributes:
        image_name: Image reference, must already exist on the target.
        target: Remote host, None for the local runtime. The executor
            decides where commands run; this field is what the caller asked for.
        runtime_flags: Extra create flags, order preserved.
        workload_arg: Single argument appended after the image.
        timeout: Seconds allowed for create and inspect.
        start_timeout: Seconds allowed for the attached start, None to wait.
    """

    image_name: str
    target: Optional[str] = None
    runtime_flags: List[str] = field(default_factory=list)
    workload_arg: Optional[str] = None
    timeout: Optional[float] = None
    start_timeout: Optional[float] = None

    def validate(self) -> None:
        if not self.image_name or not self.image_name.strip():
            raise ValidationError(
                "Image name must be a non-empty string",
                suggestions=["Pass an image reference such as dockr:1.2.3"],
            )
        if any(not isinstance(flag, str) for flag in self.runtime_flags):
            raise ValidationError("Runtime flags must be strings")


@dataclass
class RunResult:
    """Outcome of one run."""

    container_id: str
    container_name: str
    exit_code: int
    image_name: str
    target: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> dict:
        return {
            "container_id": self.container_id,
            "container_name": self.container_name,
            "exit_code": self.exit_code,
            "image_name": self.image_name,
            "target": self.target or "local",
        }


class RunOrchestrator:
    """
    Orchestrates the run workflow.

    Responsibilities:
    - Create the container from the image
    - Resolve and report the container name
    - Start the container attached and return its exit status
    """

    def __init__(
        self,
        executor: CommandExecutor,
        name_template: str = "{{.Name}}",
        on_container_named: Optional[Callable[[str], None]] = None,
        rich_console: Optional[RichConsole] = None,
    ):
        """
        Initialize run orchestrator.

        Args:
            executor: Local or remote executor, chosen once per invocation
            name_template: Template for reading the container name
            on_container_named: Called with the name before the container starts
            rich_console: Console for progress messages
        """
        self.executor = executor
        self.docker = Docker(executor, name_template=name_template)
        self.on_container_named = on_container_named
        self.rich_console = rich_console or RichConsole()

    def execute(self, request: RunRequest) -> RunResult:
        """
        Create, name and start one container.

        Args:
            request: The run request

        Returns:
            RunResult with the container name and its exit status

        Raises:
            DockrError: From the first failing step; later steps are not attempted
        """
        request.validate()
        where = self.executor.describe()
        logger.info(f"Creating container from {request.image_name} on {where}")

        container_id = self._step(
            "create",
            request,
            lambda: self.docker.create(
                request.image_name,
                runtime_flags=request.runtime_flags,
                workload_arg=request.workload_arg,
                timeout=request.timeout,
            ),
        )
        logger.debug(f"Created container {container_id}")

        container_name = self._step(
            "inspect",
            request,
            lambda: self.docker.inspect_name(container_id, timeout=request.timeout),
        )
        self._report(container_name)

        result = self._step(
            "start",
            request,
            lambda: self.docker.start_attached(
                container_name, timeout=request.start_timeout
            ),
        )
        logger.info(f"Container {container_name} exited with code {result.returncode}")

        return RunResult(
            container_id=container_id,
            container_name=container_name,
            exit_code=result.returncode,
            image_name=request.image_name,
            target=self.executor.target,
        )

    def _report(self, container_name: str) -> None:
        """Announce the name before the container produces any output."""
        if self.on_container_named is not None:
            self.on_container_named(container_name)
        else:
            self.rich_console.print(
                f"📦 Container name: [bold cyan]{container_name}[/bold cyan]"
            )

    def _step(self, phase: str, request: RunRequest, action: Callable[[], T]) -> T:
        """Run one lifecycle step, tagging failures with the step name."""
        try:
            return action()
        except DockrError as e:
            context = create_error_context(
                operation="run",
                phase=phase,
                component="RunOrchestrator",
                target=self.executor.describe(),
                image_name=request.image_name,
            )
            raise type(e)(
                f"{phase} step failed: {e.message}",
                context=context,
                cause=e,
                suggestions=e.suggestions,
            ) from e
