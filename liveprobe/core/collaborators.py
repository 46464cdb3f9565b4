"""Collaborator contracts consumed by the liveness poller.

The poller never talks to a container runtime or a terminal directly.  It
drives three small Protocols, so any object with the right methods can
stand in (the docker CLI adapters in :mod:`liveprobe.runtime`, the Rich
spinner in :mod:`liveprobe.monitor.progress`, or a scripted test double).
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, TextIO, runtime_checkable

from liveprobe.models.inspection import InspectionSnapshot


@runtime_checkable
class RuntimeInspector(Protocol):
    """Reports whether a target workload is currently running."""

    def inspect(self, target: str) -> InspectionSnapshot:
        """Return a fresh snapshot of *target*.

        Raises
        ------
        InspectionFailedError
            If the runtime query cannot complete.
        """
        ...


@runtime_checkable
class LogTailSource(Protocol):
    """Yields log text written by a target since a point in time."""

    def fetch_since(
        self,
        target: str,
        since: datetime,
        max_lines: int,
        into: TextIO,
    ) -> None:
        """Append at most *max_lines* of log output newer than *since* to *into*.

        Writing nothing is valid when no new output is available.

        Raises
        ------
        LogFetchFailedError
            If the runtime query cannot complete.
        """
        ...


@runtime_checkable
class ProgressSink(Protocol):
    """Receives start/progress/complete notifications for a long operation."""

    def started(self) -> None: ...

    def progress(self, message: str) -> None: ...

    def completed(self) -> None: ...
