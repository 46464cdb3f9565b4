"""Terminal outcome of a liveness run and the run-scoped result record."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from liveprobe.models.inspection import InspectionSnapshot
from liveprobe.models.probe import LivenessProbe


class Outcome(str, Enum):
    """How a liveness run ended."""

    MATCH_FOUND = "match_found"
    TIMED_OUT = "timed_out"
    NOT_RUNNING = "not_running"


class ProbeResult(BaseModel):
    """Everything observed during one liveness run.

    Returned on success and attached to every :class:`LivenessProbeError`
    raised by the poller, so the last inspection is available either way.
    ``outcome`` is ``None`` only when the run was aborted by a collaborator
    failure or cancellation.  ``probe`` is ``None`` for a plain running check.
    """

    model_config = ConfigDict(frozen=True)

    target: str
    outcome: Outcome | None
    probe: LivenessProbe | None = None
    iterations: int = 0
    last_inspection: InspectionSnapshot | None = None
    started_at: datetime
    finished_at: datetime

    @property
    def succeeded(self) -> bool:
        return self.outcome == Outcome.MATCH_FOUND
