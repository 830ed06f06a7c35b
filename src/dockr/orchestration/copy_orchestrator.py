#!/usr/bin/env python3
"""
Copy Orchestrator - Puts build inputs on a remote host.

Each source is copied recursively with scp to <target>:<destination>.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
import os
import posixpath
from dataclasses import dataclass, field
from typing import List, Optional

from dockr.core.console import Console
from dockr.core.errors import (
    DockrError,
    TransferError,
    ValidationError,
    create_error_context,
)


logger = logging.getLogger(__name__)


@dataclass
class CopyRequest:
    """Copy local sources to a directory on a remote host."""

    target: str
    sources: List[str] = field(default_factory=list)
    destination: str = ""
    timeout: Optional[float] = None


def remote_path(target: str, destination: str) -> str:
    """Compute the scp destination for a remote directory."""
    return f"{target}:{destination}"


class CopyOrchestrator:
    """Copies files and directories to a remote host, one source at a time."""

    def __init__(
        self,
        console: Optional[Console] = None,
        ssh_options: Optional[List[str]] = None,
    ):
        self.console = console or Console()
        self.ssh_options = list(ssh_options or [])

    def copy_args(self, source: str, target: str, destination: str) -> List[str]:
        return [
            "scp",
            "-r",
            "-o",
            "BatchMode=yes",
            *self.ssh_options,
            source,
            remote_path(target, destination),
        ]

    def execute(self, request: CopyRequest) -> List[str]:
        """
        Copy every source.

        Returns:
            Remote paths written, one per source

        Raises:
            ValidationError: If the request is incomplete or a source is missing
            TransferError: On the first failed copy; later sources are skipped
        """
        self._validate(request)

        copied = []
        for source in request.sources:
            logger.info(f"Copying {source} to {remote_path(request.target, request.destination)}")
            try:
                self.console.run(
                    self.copy_args(source, request.target, request.destination),
                    timeout=request.timeout,
                )
            except DockrError as e:
                raise TransferError(
                    f"Copy of {source} to {request.target} failed: {e.message}",
                    context=create_error_context(
                        operation="copy",
                        phase="transfer",
                        component="CopyOrchestrator",
                        target=request.target,
                        file_path=source,
                    ),
                    cause=e,
                    suggestions=e.suggestions,
                ) from e
            name = os.path.basename(os.path.normpath(source))
            copied.append(remote_path(request.target, posixpath.join(request.destination, name)))

        return copied

    def _validate(self, request: CopyRequest) -> None:
        if not request.target or not request.target.strip():
            raise ValidationError("Copy requires a target host")
        if not request.destination:
            raise ValidationError("Copy requires a destination path")
        if not request.sources:
            raise ValidationError("Copy requires at least one source path")
        missing = [source for source in request.sources if not os.path.exists(source)]
        if missing:
            raise ValidationError(
                f"Source path(s) not found: {', '.join(missing)}",
                suggestions=["Sources are local paths; check they exist"],
            )
