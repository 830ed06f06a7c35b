#!/usr/bin/env python3
"""
Configuration loader with layered merging.

Layers (low to high priority):
1. Built-in defaults
2. User file (--config or DOCKR_CONFIG)
3. Environment variables (DOCKR_*)
4. CLI options

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import json
import os
import shlex
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from dockr.core.errors import ConfigurationError


DEFAULTS: Dict[str, Any] = {
    "runtime": "docker",
    "timeout": 300,
    "ssh_options": [],
    "name_template": "{{.Name}}",
}

ENV_PREFIX = "DOCKR_"
CONFIG_ENV_VAR = "DOCKR_CONFIG"


@dataclass
class DockrConfig:
    """Resolved configuration.

    Attributes:
        runtime: Container runtime executable (docker, podman, ...).
        timeout: Seconds allowed for each non-attached command, None for no limit.
        ssh_options: Extra ``-o`` style ssh arguments for remote targets.
        name_template: Go template passed to ``inspect --format``.
    """

    runtime: str = DEFAULTS["runtime"]
    timeout: Optional[float] = DEFAULTS["timeout"]
    ssh_options: List[str] = field(default_factory=list)
    name_template: str = DEFAULTS["name_template"]


class ConfigLoader:
    """Builds a DockrConfig from defaults, a JSON file, the environment and overrides."""

    @classmethod
    def load_file(cls, path: str) -> Dict[str, Any]:
        """Load a JSON config file."""
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Config file not found: {path}", cause=e) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file {path}: {e}",
                cause=e,
                suggestions=["Config files must contain a single JSON object"],
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a JSON object")
        return data

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> Dict[str, Any]:
        """Read DOCKR_* overrides from an environment mapping."""
        values: Dict[str, Any] = {}
        if environ.get("DOCKR_RUNTIME"):
            values["runtime"] = environ["DOCKR_RUNTIME"]
        if environ.get("DOCKR_TIMEOUT"):
            values["timeout"] = environ["DOCKR_TIMEOUT"]
        if environ.get("DOCKR_SSH_OPTIONS"):
            values["ssh_options"] = shlex.split(environ["DOCKR_SSH_OPTIONS"])
        return values

    @classmethod
    def merge(cls, *layers: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge layers left to right; later layers win, None values are skipped."""
        result = deepcopy(DEFAULTS)
        for layer in layers:
            for key, value in layer.items():
                if value is None:
                    continue
                if key not in DEFAULTS:
                    raise ConfigurationError(
                        f"Unknown configuration key: {key}",
                        suggestions=[f"Valid keys: {', '.join(sorted(DEFAULTS))}"],
                    )
                result[key] = deepcopy(value)
        return result

    @classmethod
    def validate(cls, values: Dict[str, Any]) -> DockrConfig:
        """Normalize merged values into a DockrConfig."""
        runtime = values["runtime"]
        if not isinstance(runtime, str) or not runtime.strip():
            raise ConfigurationError("runtime must be a non-empty string")

        try:
            timeout = float(values["timeout"])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"timeout must be a number of seconds, got {values['timeout']!r}", cause=e
            ) from e
        if timeout < 0:
            raise ConfigurationError("timeout must be 0 (no limit) or positive")

        ssh_options = values["ssh_options"]
        if isinstance(ssh_options, str):
            ssh_options = shlex.split(ssh_options)
        if not isinstance(ssh_options, list):
            raise ConfigurationError("ssh_options must be a list of strings")

        return DockrConfig(
            runtime=runtime.strip(),
            timeout=timeout or None,
            ssh_options=[str(option) for option in ssh_options],
            name_template=str(values["name_template"]),
        )

    @classmethod
    def load_config(
        cls,
        config_file: Optional[str] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> DockrConfig:
        """
        Resolve the effective configuration.

        Args:
            config_file: Optional JSON file; falls back to DOCKR_CONFIG.
            overrides: Values from CLI options (None entries are ignored).
            environ: Environment mapping, os.environ by default.

        Returns:
            DockrConfig with all layers applied.
        """
        environ = os.environ if environ is None else environ
        config_file = config_file or environ.get(CONFIG_ENV_VAR)

        file_values = cls.load_file(config_file) if config_file else {}
        merged = cls.merge(file_values, cls.from_env(environ), overrides or {})
        return cls.validate(merged)
