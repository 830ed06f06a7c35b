#!/usr/bin/env python3
"""Module to run docker commands.

This module provides a class that speaks the container runtime's command
vocabulary (create, inspect, start, build) through an executor.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
# built-in modules
import typing
# user-defined modules
from dockr.core.console import CommandResult
from dockr.core.errors import NameResolutionError
from dockr.core.executor import CommandExecutor


DEFAULT_NAME_TEMPLATE = "{{.Name}}"


def strip_name_separator(raw_name: str) -> str:
    """Strip the single leading '/' the runtime puts in front of container names.

    Args:
        raw_name (str): The name as printed by ``inspect``.

    Returns:
        str: The usable container name.
    """
    name = raw_name.strip()
    if name.startswith("/"):
        name = name[1:]
    return name


class Docker:
    """Class to run container runtime commands.

    Attributes:
        executor (CommandExecutor): Where the commands run.
        name_template (str): Template used to read a container's name.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        name_template: str = DEFAULT_NAME_TEMPLATE,
    ) -> None:
        self.executor = executor
        self.name_template = name_template

    @staticmethod
    def create_args(
        image: str,
        runtime_flags: typing.Optional[typing.Sequence[str]] = None,
        workload_arg: typing.Optional[str] = None,
    ) -> typing.List[str]:
        """Build the ``create`` argument vector.

        Flags keep their order and go before the image; the workload
        argument, if any, follows the image.
        """
        args = ["create"]
        args.extend(runtime_flags or [])
        args.append(image)
        if workload_arg is not None:
            args.append(workload_arg)
        return args

    @staticmethod
    def build_args(
        dockerfile: str,
        tag: str,
        context_path: str,
        no_cache: bool = False,
    ) -> typing.List[str]:
        """Build the ``build`` argument vector."""
        args = ["build", "-f", dockerfile, "-t", tag]
        if no_cache:
            args.append("--no-cache")
        args.append(context_path)
        return args

    def create(
        self,
        image: str,
        runtime_flags: typing.Optional[typing.Sequence[str]] = None,
        workload_arg: typing.Optional[str] = None,
        timeout: typing.Optional[float] = None,
    ) -> str:
        """Create a container and return its identifier.

        Raises:
            NameResolutionError: If the runtime printed no identifier.
        """
        result = self.executor.run(
            self.create_args(image, runtime_flags, workload_arg), timeout=timeout
        )
        container_id = result.output.strip()
        if not container_id:
            raise NameResolutionError(
                f"Runtime returned no container identifier for image {image}"
            )
        return container_id

    def inspect_name(
        self, container_id: str, timeout: typing.Optional[float] = None
    ) -> str:
        """Resolve a container identifier to its name.

        Raises:
            NameResolutionError: If the resolved name is empty.
        """
        raw_name = self.executor.run(
            ["inspect", "--format", self.name_template, container_id],
            timeout=timeout,
        ).output
        name = strip_name_separator(raw_name)
        if not name:
            raise NameResolutionError(
                f"Could not resolve a name for container {container_id}",
                suggestions=[f"Inspect the container manually: inspect {container_id}"],
            )
        return name

    def start_attached(
        self, container_name: str, timeout: typing.Optional[float] = None
    ) -> CommandResult:
        """Start a container attached, relaying its output until it exits."""
        return self.executor.stream(["start", "-a", container_name], timeout=timeout)

    def build(
        self,
        dockerfile: str,
        tag: str,
        context_path: str,
        no_cache: bool = False,
        timeout: typing.Optional[float] = None,
    ) -> CommandResult:
        """Build an image, relaying build output."""
        return self.executor.stream(
            self.build_args(dockerfile, tag, context_path, no_cache), timeout=timeout
        )
