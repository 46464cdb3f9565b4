"""Shared test fixtures and collaborator doubles for liveprobe."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone
from typing import TextIO

import pytest

from liveprobe.core.errors import InspectionFailedError, LogFetchFailedError
from liveprobe.core.poller import LivenessPoller
from liveprobe.models.inspection import InspectionSnapshot
from liveprobe.models.probe import LivenessProbe

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Collaborator doubles
# ---------------------------------------------------------------------------


class ScriptedInspector:
    """RuntimeInspector that replays a script of running flags.

    The last entry repeats once the script runs out.  An exception instance
    in the script is raised instead of returning a snapshot.
    """

    def __init__(self, script: Sequence[bool | Exception] = (True,)) -> None:
        self.script = list(script)
        self.calls: list[str] = []

    def inspect(self, target: str) -> InspectionSnapshot:
        self.calls.append(target)
        step = self.script[min(len(self.calls), len(self.script)) - 1]
        if isinstance(step, Exception):
            raise step
        return InspectionSnapshot(
            target=target,
            running=step,
            status="running" if step else "exited",
            exit_code=None if step else 1,
            observed_at=FIXED_NOW + timedelta(seconds=len(self.calls)),
        )


class ScriptedLogSource:
    """LogTailSource that writes one scripted chunk per call.

    The last chunk repeats once the script runs out.
    """

    def __init__(self, chunks: Sequence[str | Exception] = ("",)) -> None:
        self.chunks = list(chunks)
        self.calls: list[tuple[str, datetime, int]] = []
        self.sink_sizes_before: list[int] = []

    def fetch_since(
        self, target: str, since: datetime, max_lines: int, into: TextIO
    ) -> None:
        self.calls.append((target, since, max_lines))
        self.sink_sizes_before.append(len(into.getvalue()))  # type: ignore[attr-defined]
        chunk = self.chunks[min(len(self.calls), len(self.chunks)) - 1]
        if isinstance(chunk, Exception):
            raise chunk
        into.write(chunk)


class RecordingProgressSink:
    """ProgressSink that records every notification in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str | None]] = []

    def started(self) -> None:
        self.events.append(("started", None))

    def progress(self, message: str) -> None:
        self.events.append(("progress", message))

    def completed(self) -> None:
        self.events.append(("completed", None))

    @property
    def messages(self) -> list[str]:
        return [msg for kind, msg in self.events if kind == "progress" and msg]


class RecordingSleeper:
    """Stands in for time.sleep; records requested durations."""

    def __init__(self, on_sleep: Callable[[], None] | None = None) -> None:
        self.durations: list[float] = []
        self._on_sleep = on_sleep

    def __call__(self, seconds: float) -> None:
        self.durations.append(seconds)
        if self._on_sleep is not None:
            self._on_sleep()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def target() -> str:
    """A deterministic container id."""
    return "c0ffee-web-1"


@pytest.fixture
def ready_probe() -> LivenessProbe:
    """90s budget, 30s interval, looking for 'ready'."""
    return LivenessProbe(poll_time=90000, poll_interval=30000, log_contains="ready")


@pytest.fixture
def progress() -> RecordingProgressSink:
    return RecordingProgressSink()


@pytest.fixture
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()


@pytest.fixture
def make_poller(
    progress: RecordingProgressSink, sleeper: RecordingSleeper
) -> Callable[..., LivenessPoller]:
    """Factory fixture: wire a LivenessPoller to scripted doubles."""

    def _factory(
        inspector: ScriptedInspector | None = None,
        log_source: ScriptedLogSource | None = None,
    ) -> LivenessPoller:
        return LivenessPoller(
            inspector or ScriptedInspector(),
            log_source or ScriptedLogSource(),
            progress,
            sleep=sleeper,
            clock=lambda: FIXED_NOW,
        )

    return _factory


@pytest.fixture
def inspection_failure() -> InspectionFailedError:
    return InspectionFailedError("daemon unreachable")


@pytest.fixture
def log_failure() -> LogFetchFailedError:
    return LogFetchFailedError("log stream closed")
