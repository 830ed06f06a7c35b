"""
Build and copy orchestrator unit tests.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import pytest

from dockr.core.errors import (
    BuildError,
    ConnectionError,
    TransferError,
    ValidationError,
)
from dockr.orchestration.build_orchestrator import BuildOrchestrator, BuildRequest
from dockr.orchestration.copy_orchestrator import (
    CopyOrchestrator,
    CopyRequest,
    remote_path,
)


@pytest.fixture
def build_tree(tmp_path):
    """A build context with a Dockerfile in it."""
    dockerfile = tmp_path / "Dockerfile"
    dockerfile.write_text("FROM python:3.12-slim\n")
    return tmp_path, dockerfile


@pytest.mark.unit
class TestBuildOrchestrator:

    def test_local_build(self, scripted_console, local_executor_factory, build_tree):
        context_dir, dockerfile = build_tree
        console = scripted_console((0, "Successfully built"))

        result = BuildOrchestrator(local_executor_factory(console)).execute(
            BuildRequest(dockerfile=str(dockerfile), tag="dockr:1.2.3", context_path=str(context_dir))
        )

        assert result.success
        assert console.commands == [
            ["docker", "build", "-f", str(dockerfile), "-t", "dockr:1.2.3", str(context_dir)],
        ]
        assert console.calls[0]["live_output"] is True

    def test_no_cache(self, scripted_console, local_executor_factory, build_tree):
        context_dir, dockerfile = build_tree
        console = scripted_console((0, ""))

        BuildOrchestrator(local_executor_factory(console)).execute(
            BuildRequest(
                dockerfile=str(dockerfile),
                tag="dockr",
                context_path=str(context_dir),
                no_cache=True,
            )
        )

        assert "--no-cache" in console.commands[0]

    def test_missing_dockerfile_rejected_before_runtime(self, scripted_console, local_executor_factory, tmp_path):
        console = scripted_console()

        with pytest.raises(ValidationError):
            BuildOrchestrator(local_executor_factory(console)).execute(
                BuildRequest(
                    dockerfile=str(tmp_path / "missing.Dockerfile"),
                    tag="dockr",
                    context_path=str(tmp_path),
                )
            )

        assert console.calls == []

    def test_missing_context_rejected(self, scripted_console, local_executor_factory, build_tree):
        _, dockerfile = build_tree
        console = scripted_console()

        with pytest.raises(ValidationError):
            BuildOrchestrator(local_executor_factory(console)).execute(
                BuildRequest(dockerfile=str(dockerfile), tag="dockr", context_path="/no/such/dir")
            )

    def test_empty_tag_rejected(self, scripted_console, local_executor_factory, build_tree):
        context_dir, dockerfile = build_tree

        with pytest.raises(ValidationError):
            BuildOrchestrator(local_executor_factory(scripted_console())).execute(
                BuildRequest(dockerfile=str(dockerfile), tag="", context_path=str(context_dir))
            )

    def test_remote_build_uses_remote_paths(self, scripted_console, remote_executor_factory):
        console = scripted_console((0, ""))

        BuildOrchestrator(remote_executor_factory(console)).execute(
            BuildRequest(
                dockerfile="/srv/build/Dockerfile",
                tag="dockr:1.2.3",
                context_path="/srv/build",
                target="192.168.0.83",
            )
        )

        command = console.commands[0]
        assert command[:4] == ["ssh", "-o", "BatchMode=yes", "192.168.0.83"]
        assert command[-1] == "docker build -f /srv/build/Dockerfile -t dockr:1.2.3 /srv/build"

    def test_failed_build_raises_build_error(self, scripted_console, local_executor_factory, build_tree):
        context_dir, dockerfile = build_tree
        console = scripted_console((1, "failed to solve"))

        with pytest.raises(BuildError) as exc_info:
            BuildOrchestrator(local_executor_factory(console)).execute(
                BuildRequest(dockerfile=str(dockerfile), tag="dockr", context_path=str(context_dir))
            )

        assert exc_info.value.context.phase == "build"
        assert exc_info.value.context.image_name == "dockr"

    def test_unreachable_remote(self, scripted_console, remote_executor_factory):
        console = scripted_console((255, "Connection refused"))

        with pytest.raises(ConnectionError) as exc_info:
            BuildOrchestrator(remote_executor_factory(console)).execute(
                BuildRequest(
                    dockerfile="/srv/Dockerfile",
                    tag="dockr",
                    context_path="/srv",
                    target="192.168.0.83",
                )
            )

        assert str(exc_info.value).startswith("build step failed:")


@pytest.mark.unit
class TestCopyOrchestrator:

    def test_remote_path(self):
        assert remote_path("192.168.0.83", "/srv/build") == "192.168.0.83:/srv/build"

    def test_copies_each_source_in_order(self, scripted_console, tmp_path):
        first = tmp_path / "Dockerfile"
        first.write_text("FROM scratch\n")
        second = tmp_path / "scripts"
        second.mkdir()
        console = scripted_console("", "")

        copied = CopyOrchestrator(console=console).execute(
            CopyRequest(
                target="192.168.0.83",
                sources=[str(first), str(second)],
                destination="/srv/build",
                timeout=60,
            )
        )

        assert console.commands == [
            ["scp", "-r", "-o", "BatchMode=yes", str(first), "192.168.0.83:/srv/build"],
            ["scp", "-r", "-o", "BatchMode=yes", str(second), "192.168.0.83:/srv/build"],
        ]
        assert [call["timeout"] for call in console.calls] == [60, 60]
        assert copied == [
            "192.168.0.83:/srv/build/Dockerfile",
            "192.168.0.83:/srv/build/scripts",
        ]

    def test_ssh_options_forwarded(self, scripted_console, tmp_path):
        source = tmp_path / "Dockerfile"
        source.write_text("")
        console = scripted_console("")

        CopyOrchestrator(console=console, ssh_options=["-P", "2222"]).execute(
            CopyRequest(target="host", sources=[str(source)], destination="/tmp")
        )

        assert console.commands[0][:6] == ["scp", "-r", "-o", "BatchMode=yes", "-P", "2222"]

    def test_stops_at_first_failure(self, scripted_console, tmp_path):
        sources = []
        for name in ("a", "b", "c"):
            path = tmp_path / name
            path.write_text(name)
            sources.append(str(path))
        console = scripted_console("", (1, "scp: /srv/build: Permission denied"), "")

        with pytest.raises(TransferError) as exc_info:
            CopyOrchestrator(console=console).execute(
                CopyRequest(target="host", sources=sources, destination="/srv/build")
            )

        assert len(console.calls) == 2
        assert "Permission denied" in str(exc_info.value)
        assert exc_info.value.context.file_path == sources[1]

    def test_missing_source_rejected_before_copying(self, scripted_console, tmp_path):
        present = tmp_path / "present"
        present.write_text("")
        console = scripted_console()

        with pytest.raises(ValidationError) as exc_info:
            CopyOrchestrator(console=console).execute(
                CopyRequest(
                    target="host",
                    sources=[str(present), str(tmp_path / "absent")],
                    destination="/srv",
                )
            )

        assert "absent" in str(exc_info.value)
        assert console.calls == []

    @pytest.mark.parametrize("target,sources,destination", [
        ("", ["x"], "/srv"),
        ("host", [], "/srv"),
        ("host", ["x"], ""),
    ])
    def test_incomplete_request_rejected(self, scripted_console, target, sources, destination):
        with pytest.raises(ValidationError):
            CopyOrchestrator(console=scripted_console()).execute(
                CopyRequest(target=target, sources=sources, destination=destination)
            )
