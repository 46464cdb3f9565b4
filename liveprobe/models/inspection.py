"""Point-in-time observation of a container's running state."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class InspectionSnapshot(BaseModel):
    """Result of a single runtime inspection.

    Only ``running`` drives the poller.  The remaining fields are carried
    for diagnostics when a probe fails.
    """

    model_config = ConfigDict(frozen=True)

    target: str
    running: bool
    observed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    status: str | None = None  # e.g. "running", "exited", "restarting"
    exit_code: int | None = None
    started_at: datetime | None = None

    def describe(self) -> str:
        """Short human-readable summary used in error messages."""
        parts = [f"running={self.running}"]
        if self.status:
            parts.append(f"status={self.status}")
        if self.exit_code is not None:
            parts.append(f"exit_code={self.exit_code}")
        parts.append(f"observed_at={self.observed_at.isoformat()}")
        return ", ".join(parts)
