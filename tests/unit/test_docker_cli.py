"""Tests for the docker CLI adapters — subprocess.run is monkeypatched."""

from __future__ import annotations

import io
import json
import subprocess
from datetime import datetime, timezone

import pytest

from liveprobe.config import ProbeSettings
from liveprobe.core.collaborators import LogTailSource, RuntimeInspector
from liveprobe.core.errors import InspectionFailedError, LogFetchFailedError
from liveprobe.runtime import docker_cli
from liveprobe.runtime.docker_cli import (
    DockerCliInspector,
    DockerCliLogSource,
    inspector_from_settings,
    log_source_from_settings,
)


class FakeRun:
    """Replacement for subprocess.run returning a canned result."""

    def __init__(self, stdout: str = "", stderr: str = "", returncode: int = 0, exc=None):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.exc = exc
        self.commands: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        self.commands.append(cmd)
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr(docker_cli.subprocess, "run", fake)
    return fake


RUNNING_STATE = {
    "Status": "running",
    "Running": True,
    "ExitCode": 0,
    "StartedAt": "2026-03-01T11:59:30.123456789Z",
}


class TestProtocols:
    def test_adapters_satisfy_protocols(self):
        assert isinstance(DockerCliInspector(), RuntimeInspector)
        assert isinstance(DockerCliLogSource(), LogTailSource)


class TestDockerCliInspector:
    def test_running_container(self, fake_run: FakeRun):
        fake_run.stdout = json.dumps(RUNNING_STATE) + "\n"

        snapshot = DockerCliInspector().inspect("web")

        assert snapshot.running is True
        assert snapshot.status == "running"
        assert snapshot.exit_code == 0
        assert snapshot.started_at == datetime(
            2026, 3, 1, 11, 59, 30, 123456, tzinfo=timezone.utc
        )
        assert fake_run.commands == [
            ["docker", "inspect", "--format", "{{json .State}}", "web"]
        ]

    def test_exited_container(self, fake_run: FakeRun):
        fake_run.stdout = json.dumps(
            {
                "Status": "exited",
                "Running": False,
                "ExitCode": 137,
                "StartedAt": "0001-01-01T00:00:00Z",
            }
        )
        snapshot = DockerCliInspector().inspect("web")
        assert snapshot.running is False
        assert snapshot.exit_code == 137
        assert snapshot.started_at is None

    def test_host_and_binary(self, fake_run: FakeRun):
        fake_run.stdout = json.dumps(RUNNING_STATE)
        DockerCliInspector(binary="podman", host="tcp://10.0.0.5:2375").inspect("web")
        assert fake_run.commands[0][:3] == ["podman", "--host", "tcp://10.0.0.5:2375"]

    def test_non_zero_exit(self, fake_run: FakeRun):
        fake_run.returncode = 1
        fake_run.stderr = "Error: No such object: web\n"
        with pytest.raises(InspectionFailedError, match="No such object"):
            DockerCliInspector().inspect("web")

    def test_unparsable_output(self, fake_run: FakeRun):
        fake_run.stdout = "not json"
        with pytest.raises(InspectionFailedError, match="Unparsable"):
            DockerCliInspector().inspect("web")

    def test_timeout(self, fake_run: FakeRun):
        fake_run.exc = subprocess.TimeoutExpired(["docker"], 30)
        with pytest.raises(InspectionFailedError, match="timed out"):
            DockerCliInspector().inspect("web")

    def test_missing_binary(self, fake_run: FakeRun):
        fake_run.exc = FileNotFoundError("docker")
        with pytest.raises(InspectionFailedError, match="Could not run"):
            DockerCliInspector().inspect("web")


class TestDockerCliLogSource:
    SINCE = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

    def test_appends_stdout_and_stderr(self, fake_run: FakeRun):
        fake_run.stdout = "listening on :8080\n"
        fake_run.stderr = "WARN slow start\n"
        sink = io.StringIO()
        sink.write("earlier\n")

        DockerCliLogSource().fetch_since("web", self.SINCE, 10, sink)

        assert sink.getvalue() == "earlier\nlistening on :8080\nWARN slow start\n"
        assert fake_run.commands == [
            [
                "docker",
                "logs",
                "--since",
                "2026-03-01T12:00:00.000000Z",
                "--tail",
                "10",
                "web",
            ]
        ]

    def test_naive_since_treated_as_utc(self, fake_run: FakeRun):
        DockerCliLogSource().fetch_since("web", datetime(2026, 3, 1, 12, 0, 0), 5, io.StringIO())
        assert "2026-03-01T12:00:00.000000Z" in fake_run.commands[0]

    def test_nothing_new(self, fake_run: FakeRun):
        sink = io.StringIO()
        DockerCliLogSource().fetch_since("web", self.SINCE, 10, sink)
        assert sink.getvalue() == ""

    def test_non_zero_exit(self, fake_run: FakeRun):
        fake_run.returncode = 1
        fake_run.stderr = "Error response from daemon: container gone"
        with pytest.raises(LogFetchFailedError, match="container gone"):
            DockerCliLogSource().fetch_since("web", self.SINCE, 10, io.StringIO())

    def test_timeout(self, fake_run: FakeRun):
        fake_run.exc = subprocess.TimeoutExpired(["docker"], 30)
        with pytest.raises(LogFetchFailedError, match="timed out"):
            DockerCliLogSource().fetch_since("web", self.SINCE, 10, io.StringIO())


class TestFromSettings:
    def test_settings_applied(self):
        settings = ProbeSettings(
            runtime_binary="podman", runtime_host="unix:///run/podman.sock",
            command_timeout_seconds=5.0,
        )
        inspector = inspector_from_settings(settings)
        logs = log_source_from_settings(settings)
        for adapter in (inspector, logs):
            assert adapter.binary == "podman"
            assert adapter.host == "unix:///run/podman.sock"
            assert adapter.timeout == 5.0
