#!/usr/bin/env python3
"""
Build Orchestrator - Builds an image locally or on a remote host.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dockr.core.console import CommandResult
from dockr.core.docker import Docker
from dockr.core.errors import (
    BuildError,
    DockrError,
    ValidationError,
    create_error_context,
)
from dockr.core.executor import CommandExecutor


logger = logging.getLogger(__name__)


@dataclass
class BuildRequest:
    """One image build.

    Paths are local paths, or paths on the target host when a target is set.
    """

    dockerfile: str
    tag: str
    context_path: str
    target: Optional[str] = None
    no_cache: bool = False
    timeout: Optional[float] = None


class BuildOrchestrator:
    """
    Orchestrates the build workflow.

    Responsibilities:
    - Validate local build inputs
    - Dispatch the build to the selected executor
    - Turn a failed build into a BuildError
    """

    def __init__(self, executor: CommandExecutor):
        self.executor = executor
        self.docker = Docker(executor)

    def execute(self, request: BuildRequest) -> CommandResult:
        """
        Build the image.

        Returns:
            CommandResult of the build command

        Raises:
            ValidationError: If inputs are missing
            BuildError: If the runtime reports a failed build
        """
        self._validate(request)
        context = create_error_context(
            operation="build",
            phase="build",
            component="BuildOrchestrator",
            target=request.target or "local",
            image_name=request.tag,
            file_path=request.dockerfile,
        )

        logger.info(
            f"Building {request.tag} from {request.dockerfile} on {self.executor.describe()}"
        )
        try:
            result = self.docker.build(
                request.dockerfile,
                request.tag,
                request.context_path,
                no_cache=request.no_cache,
                timeout=request.timeout,
            )
        except DockrError as e:
            raise type(e)(
                f"build step failed: {e.message}",
                context=context,
                cause=e,
                suggestions=e.suggestions,
            ) from e

        if not result.success:
            raise BuildError(
                f"Build of {request.tag} failed with exit code {result.returncode}",
                context=context,
                suggestions=["Check the build output above for the failing instruction"],
            )

        logger.info(f"Built {request.tag}")
        return result

    def _validate(self, request: BuildRequest) -> None:
        for name in ("dockerfile", "tag", "context_path"):
            if not getattr(request, name):
                raise ValidationError(f"Build requires a non-empty {name}")

        # remote paths cannot be checked from here
        if request.target:
            return

        if not os.path.isfile(request.dockerfile):
            raise ValidationError(
                f"Dockerfile not found: {request.dockerfile}",
                suggestions=["Check the Dockerfile path"],
            )
        if not os.path.isdir(request.context_path):
            raise ValidationError(
                f"Build context is not a directory: {request.context_path}"
            )
