"""Error hierarchy for liveness probing.

Every failure that ends a run derives from :class:`LivenessProbeError` and
carries the run-scoped :class:`~liveprobe.models.outcome.ProbeResult` that
was assembled up to the point of failure.  Nothing here is retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from liveprobe.models.outcome import ProbeResult


class InvalidConfigurationError(ValueError):
    """Raised when a probe is built with a non-positive duration or empty substring."""


class LivenessProbeError(RuntimeError):
    """Base class for failures that terminate a liveness run."""

    def __init__(self, message: str, *, result: ProbeResult | None = None) -> None:
        super().__init__(message)
        self.result = result


class InspectionFailedError(LivenessProbeError):
    """Raised when the runtime cannot report a target's running state."""


class LogFetchFailedError(LivenessProbeError):
    """Raised when the runtime cannot return a target's log output."""


class ContainerNotRunningError(LivenessProbeError):
    """Raised when the target is observed in a non-running state."""

    def __init__(
        self, message: str, *, target: str, result: ProbeResult | None = None
    ) -> None:
        super().__init__(message, result=result)
        self.target = target


class ProbeTimeoutError(LivenessProbeError):
    """Raised when the poll budget is exhausted without a log match."""


class ProbeCancelledError(LivenessProbeError):
    """Raised when a run is cancelled between iterations."""
