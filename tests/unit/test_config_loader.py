"""
Unit tests for ConfigLoader.

Tests the layered configuration: defaults, file, environment, CLI overrides.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import json

import pytest

from dockr.core.config import DEFAULTS, ConfigLoader, DockrConfig
from dockr.core.errors import ConfigurationError


@pytest.fixture
def config_file(tmp_path):
    def _write(data):
        path = tmp_path / "dockr.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return str(path)
    return _write


@pytest.mark.unit
class TestDefaults:

    def test_defaults_without_any_layer(self):
        config = ConfigLoader.load_config(environ={})

        assert config.runtime == "docker"
        assert config.timeout == 300
        assert config.ssh_options == []
        assert config.name_template == "{{.Name}}"

    def test_dataclass_defaults_match(self):
        config = DockrConfig()

        assert config.runtime == DEFAULTS["runtime"]
        assert config.name_template == DEFAULTS["name_template"]


@pytest.mark.unit
class TestLayering:

    def test_file_overrides_defaults(self, config_file):
        path = config_file({"runtime": "podman", "timeout": 60})

        config = ConfigLoader.load_config(config_file=path, environ={})

        assert config.runtime == "podman"
        assert config.timeout == 60

    def test_env_overrides_file(self, config_file):
        path = config_file({"runtime": "podman", "timeout": 60})
        environ = {"DOCKR_TIMEOUT": "15", "DOCKR_SSH_OPTIONS": "-p 2222 -o ConnectTimeout=5"}

        config = ConfigLoader.load_config(config_file=path, environ=environ)

        assert config.runtime == "podman"
        assert config.timeout == 15
        assert config.ssh_options == ["-p", "2222", "-o", "ConnectTimeout=5"]

    def test_cli_overrides_env(self):
        environ = {"DOCKR_RUNTIME": "podman"}

        config = ConfigLoader.load_config(
            overrides={"runtime": "nerdctl", "timeout": None}, environ=environ
        )

        assert config.runtime == "nerdctl"
        assert config.timeout == 300

    def test_config_file_from_env(self, config_file):
        path = config_file({"runtime": "podman"})

        config = ConfigLoader.load_config(environ={"DOCKR_CONFIG": path})

        assert config.runtime == "podman"

    def test_zero_timeout_means_no_limit(self):
        config = ConfigLoader.load_config(overrides={"timeout": 0}, environ={})

        assert config.timeout is None

    def test_ssh_options_string_in_file(self, config_file):
        path = config_file({"ssh_options": "-i /keys/id"})

        config = ConfigLoader.load_config(config_file=path, environ={})

        assert config.ssh_options == ["-i", "/keys/id"]

    def test_uses_process_environment_by_default(self, clean_env):
        clean_env.setenv("DOCKR_RUNTIME", "podman")

        assert ConfigLoader.load_config().runtime == "podman"


@pytest.mark.unit
class TestInvalidConfig:

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigLoader.load_config(config_file=str(tmp_path / "nope.json"), environ={})

    def test_invalid_json(self, config_file):
        path = config_file("{not json")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            ConfigLoader.load_config(config_file=path, environ={})

    def test_non_object_json(self, config_file):
        path = config_file([1, 2])

        with pytest.raises(ConfigurationError):
            ConfigLoader.load_config(config_file=path, environ={})

    def test_unknown_key(self, config_file):
        path = config_file({"runtme": "podman"})

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.load_config(config_file=path, environ={})

        assert "runtme" in str(exc_info.value)
        assert exc_info.value.suggestions

    @pytest.mark.parametrize("timeout", ["soon", -5, [1]])
    def test_bad_timeout(self, timeout):
        with pytest.raises(ConfigurationError):
            ConfigLoader.load_config(overrides={"timeout": timeout}, environ={})

    def test_empty_runtime(self):
        with pytest.raises(ConfigurationError):
            ConfigLoader.load_config(overrides={"runtime": "  "}, environ={})

    def test_ssh_options_wrong_type(self, config_file):
        path = config_file({"ssh_options": {"port": 22}})

        with pytest.raises(ConfigurationError):
            ConfigLoader.load_config(config_file=path, environ={})
