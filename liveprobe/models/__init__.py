"""liveprobe data models — all Pydantic v2, all frozen (immutable)."""

from liveprobe.models.inspection import InspectionSnapshot
from liveprobe.models.outcome import Outcome, ProbeResult
from liveprobe.models.probe import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_POLL_TIME,
    LivenessProbe,
    probe,
)

__all__ = [
    # probe
    "LivenessProbe",
    "probe",
    "DEFAULT_POLL_TIME",
    "DEFAULT_POLL_INTERVAL",
    # inspection
    "InspectionSnapshot",
    # outcome
    "Outcome",
    "ProbeResult",
]
