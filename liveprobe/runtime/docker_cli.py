"""Docker CLI adapters — inspect state and tail logs via ``docker``.

Any binary that speaks the docker CLI (``podman`` included) works.  Both
adapters shell out with a timeout and translate every failure into the
probe error hierarchy; nothing is retried here.
"""

from __future__ import annotations

import json
import logging
import re
import subprocess
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, TextIO

from liveprobe.core.errors import InspectionFailedError, LogFetchFailedError
from liveprobe.models.inspection import InspectionSnapshot

if TYPE_CHECKING:
    from liveprobe.config import ProbeSettings

logger = logging.getLogger(__name__)

# Zero value docker reports for containers that never started.
_ZERO_TIME_PREFIX = "0001-01-01"
_FRACTION_RE = re.compile(r"\.(\d+)")


class _DockerCli:
    """Shared command construction and execution."""

    def __init__(
        self,
        binary: str = "docker",
        host: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.binary = binary
        self.host = host
        self.timeout = timeout

    def _command(self, *args: str) -> list[str]:
        cmd = [self.binary]
        if self.host:
            cmd += ["--host", self.host]
        cmd += list(args)
        return cmd

    def _run(self, cmd: list[str]) -> subprocess.CompletedProcess[str]:
        logger.debug("Running %s", " ".join(cmd))
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=False,
        )


class DockerCliInspector(_DockerCli):
    """RuntimeInspector backed by ``docker inspect``."""

    def inspect(self, target: str) -> InspectionSnapshot:
        cmd = self._command("inspect", "--format", "{{json .State}}", target)
        try:
            proc = self._run(cmd)
        except subprocess.TimeoutExpired as exc:
            raise InspectionFailedError(
                f"Inspecting container '{target}' timed out after {self.timeout}s"
            ) from exc
        except OSError as exc:
            raise InspectionFailedError(
                f"Could not run '{self.binary}' to inspect container '{target}': {exc}"
            ) from exc

        if proc.returncode != 0:
            raise InspectionFailedError(
                f"Inspecting container '{target}' failed "
                f"(exit {proc.returncode}): {proc.stderr.strip()}"
            )

        try:
            state = json.loads(proc.stdout)
        except json.JSONDecodeError as exc:
            raise InspectionFailedError(
                f"Unparsable inspect output for container '{target}': {proc.stdout[:200]!r}"
            ) from exc
        if not isinstance(state, dict):
            raise InspectionFailedError(
                f"Unexpected inspect output for container '{target}': {state!r}"
            )

        return _snapshot_from_state(target, state)


class DockerCliLogSource(_DockerCli):
    """LogTailSource backed by ``docker logs --since --tail``."""

    def fetch_since(
        self,
        target: str,
        since: datetime,
        max_lines: int,
        into: TextIO,
    ) -> None:
        cmd = self._command(
            "logs",
            "--since",
            _format_since(since),
            "--tail",
            str(max_lines),
            target,
        )
        try:
            proc = self._run(cmd)
        except subprocess.TimeoutExpired as exc:
            raise LogFetchFailedError(
                f"Fetching logs for container '{target}' timed out after {self.timeout}s"
            ) from exc
        except OSError as exc:
            raise LogFetchFailedError(
                f"Could not run '{self.binary}' to fetch logs for container '{target}': {exc}"
            ) from exc

        if proc.returncode != 0:
            raise LogFetchFailedError(
                f"Fetching logs for container '{target}' failed "
                f"(exit {proc.returncode}): {proc.stderr.strip()}"
            )

        # Container stdout and stderr are separate streams on the CLI.
        into.write(proc.stdout)
        into.write(proc.stderr)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _format_since(since: datetime) -> str:
    if since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)
    return since.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value or value.startswith(_ZERO_TIME_PREFIX):
        return None
    text = value.replace("Z", "+00:00")
    # Docker emits nanoseconds; fromisoformat tops out at microseconds.
    match = _FRACTION_RE.search(text)
    if match:
        text = f"{text[: match.start()]}.{match.group(1)[:6].ljust(6, '0')}{text[match.end():]}"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _snapshot_from_state(target: str, state: dict[str, Any]) -> InspectionSnapshot:
    exit_code = state.get("ExitCode")
    return InspectionSnapshot(
        target=target,
        running=bool(state.get("Running", False)),
        status=state.get("Status"),
        exit_code=exit_code if isinstance(exit_code, int) else None,
        started_at=_parse_timestamp(state.get("StartedAt")),
    )


def inspector_from_settings(settings: ProbeSettings) -> DockerCliInspector:
    """Build a :class:`DockerCliInspector` from settings."""
    return DockerCliInspector(
        binary=settings.runtime_binary,
        host=settings.runtime_host,
        timeout=settings.command_timeout_seconds,
    )


def log_source_from_settings(settings: ProbeSettings) -> DockerCliLogSource:
    """Build a :class:`DockerCliLogSource` from settings."""
    return DockerCliLogSource(
        binary=settings.runtime_binary,
        host=settings.runtime_host,
        timeout=settings.command_timeout_seconds,
    )
