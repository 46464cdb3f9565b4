"""Progress sinks — where the poller reports that it is still waiting.

All three satisfy :class:`~liveprobe.core.collaborators.ProgressSink`.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.status import Status

logger = logging.getLogger(__name__)


class NullProgressSink:
    """Discards every notification."""

    def started(self) -> None:
        pass

    def progress(self, message: str) -> None:
        pass

    def completed(self) -> None:
        pass


class LoggingProgressSink:
    """Writes notifications to a logger at INFO."""

    def __init__(self, description: str = "liveness probe", log: logging.Logger | None = None) -> None:
        self.description = description
        self._log = log or logger

    def started(self) -> None:
        self._log.info("%s started", self.description)

    def progress(self, message: str) -> None:
        self._log.info("%s: %s", self.description, message)

    def completed(self) -> None:
        self._log.info("%s completed", self.description)


class RichProgressSink:
    """Shows a Rich spinner while the probe waits.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    description:
        Initial spinner text, shown until the first progress update.
    """

    def __init__(
        self,
        console: Console | None = None,
        description: str = "Waiting for liveness...",
    ) -> None:
        self.console = console or Console()
        self.description = description
        self._status: Status | None = None

    def started(self) -> None:
        if self._status is None:
            self._status = self.console.status(f"[bold cyan]{self.description}[/bold cyan]")
            self._status.start()

    def progress(self, message: str) -> None:
        if self._status is None:
            self.console.print(f"[dim]{message}[/dim]")
            return
        self._status.update(f"[bold cyan]{message}[/bold cyan]")

    def completed(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
