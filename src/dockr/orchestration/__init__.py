"""
Orchestration layer for dockr workflows.

Sits between the CLI (presentation) and the core executors.

Architecture:
- BuildOrchestrator: Builds an image, locally or remotely
- CopyOrchestrator: Copies build inputs to a remote host
- RunOrchestrator: Manages the container lifecycle (create, name, start)
"""

from .build_orchestrator import BuildOrchestrator, BuildRequest
from .copy_orchestrator import CopyOrchestrator, CopyRequest
from .run_orchestrator import RunOrchestrator, RunRequest, RunResult

__all__ = [
    "BuildOrchestrator",
    "BuildRequest",
    "CopyOrchestrator",
    "CopyRequest",
    "RunOrchestrator",
    "RunRequest",
    "RunResult",
]
